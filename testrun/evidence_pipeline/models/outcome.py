"""Flattened per-attempt outcomes and their raw attachments."""

from pathlib import Path
from typing import Literal, NewType

from pydantic import BaseModel, ConfigDict, Field

from testrun.evidence_pipeline.models.report import AttemptStatus

ArtifactKey = NewType("ArtifactKey", str)


class FileReference(BaseModel):
    """Attachment bytes stored in a file, read when staged."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["file"] = "file"
    path: Path = Field(..., description="Absolute or work-dir relative path")


class InlineBytes(BaseModel):
    """Attachment bytes carried in the report itself."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["inline"] = "inline"
    data: bytes = Field(..., description="Decoded attachment content")


class RawAttachment(BaseModel):
    """Attachment of one attempt, before upload."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Attachment name")
    content_type: str | None = Field(default=None, description="Declared MIME type")
    source: FileReference | InlineBytes = Field(
        ..., discriminator="kind", description="Where the bytes come from"
    )


class TestOutcome(BaseModel):
    """One attempt of one test, with its suite breadcrumb."""

    __test__ = False

    model_config = ConfigDict(frozen=True)

    suite_path: tuple[str, ...] = Field(..., description="Ancestor suite titles")
    spec_title: str = Field(..., description="Spec title")
    project_name: str = Field(..., description="Playwright project name")
    attempt_index: int = Field(..., ge=0, description="0 for the first attempt")
    repeat_index: int = Field(
        default=0,
        ge=0,
        description="0 unless an earlier test shares suite path, spec and project",
    )
    status: AttemptStatus = Field(..., description="Attempt status")
    duration_ms: int = Field(..., ge=0, description="Attempt duration in ms")
    error_message: str | None = Field(default=None, description="Failure message")
    raw_attachments: tuple[RawAttachment, ...] = Field(
        default=(), description="Attachments in report order"
    )
