"""Models for uploaded artifacts and sink-facing records."""

from pydantic import BaseModel, ConfigDict, Field

from testrun.evidence_pipeline.models.report import AttemptStatus


class UploadedArtifact(BaseModel):
    """Artifact acknowledged by the blob store."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Artifact key the blob was stored under")
    url: str = Field(..., min_length=1, description="Retrieval URL")
    content_type: str = Field(..., description="MIME type the blob was stored with")


class ArtifactLink(BaseModel):
    """Resolved artifact reference inside a record."""

    name: str = Field(..., description="Attachment name")
    url: str = Field(..., min_length=1, description="Retrieval URL")
    content_type: str = Field(..., description="MIME type")


class TabularRecord(BaseModel):
    """Flat row describing one test attempt and its evidence."""

    suite_path: str = Field(..., description="Suite titles joined with ' > '")
    spec_title: str = Field(..., description="Spec title")
    project_name: str = Field(..., description="Playwright project name")
    attempt_index: int = Field(..., ge=0, description="0 for the first attempt")
    repeat_index: int = Field(default=0, ge=0, description="Repeat of the test")
    status: AttemptStatus = Field(..., description="Attempt status")
    duration_ms: int = Field(..., ge=0, description="Attempt duration in ms")
    error_message: str | None = Field(default=None, description="Failure message")
    artifacts: list[ArtifactLink] = Field(
        default_factory=list, description="Uploaded evidence"
    )


class ProjectionWarning(BaseModel):
    """Attachment left out of its record because it was not uploaded."""

    key: str = Field(..., description="Artifact key that had no upload")
    suite_path: str = Field(..., description="Owning record's suite path")
    spec_title: str = Field(..., description="Owning record's spec title")
    project_name: str = Field(..., description="Owning record's project")
    attempt_index: int = Field(..., description="Owning record's attempt")
    repeat_index: int = Field(default=0, description="Owning record's repeat")
    attachment_name: str = Field(..., description="Attachment name")
    reason: str = Field(..., description="Why the artifact is missing")


class UploadFailure(BaseModel):
    """Serializable form of a per-artifact upload failure."""

    key: str = Field(..., description="Artifact key")
    error: str = Field(..., description="Error description")


class PipelineResult(BaseModel):
    """Everything a pipeline run hands back to its caller."""

    records: list[TabularRecord] = Field(default_factory=list)
    warnings: list[ProjectionWarning] = Field(default_factory=list)
    failures: list[UploadFailure] = Field(default_factory=list)

    @property
    def artifact_count(self) -> int:
        """Number of artifacts linked from the records."""
        return sum(len(record.artifacts) for record in self.records)
