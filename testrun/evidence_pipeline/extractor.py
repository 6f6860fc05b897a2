"""Assign artifact keys and content types to raw attachments."""

from pathlib import PurePosixPath
from urllib.parse import quote

from testrun.evidence_pipeline.models.outcome import (
    ArtifactKey,
    RawAttachment,
    TestOutcome,
)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES_BY_EXTENSION = {
    ".png": "image/png",
    ".webm": "video/webm",
    ".zip": "application/zip",
    ".json": "application/json",
}


def artifact_key(
    suite_path: tuple[str, ...],
    spec_title: str,
    project_name: str,
    attempt_index: int,
    name: str,
    occurrence: int = 1,
    repeat_index: int = 0,
) -> ArtifactKey:
    """Build the key of an attachment.

    Segments are percent-encoded so separators inside titles cannot collide.
    The n-th attachment sharing a name within one outcome gets a ``#n``
    suffix; the first one has none. Repeats of the same test (``repeat_index``
    above 0) carry a ``#n`` suffix on the project segment the same way.

    """
    project = quote(project_name, safe=" ")
    if repeat_index > 0:
        project = f"{project}#{repeat_index + 1}"
    segments = [
        *(quote(segment, safe=" ") for segment in suite_path),
        quote(spec_title, safe=" "),
        project,
        str(attempt_index),
        quote(name, safe=" "),
    ]
    key = "/".join(segments)
    if occurrence > 1:
        key = f"{key}#{occurrence}"
    return ArtifactKey(key)


def extract(outcome: TestOutcome) -> list[tuple[ArtifactKey, RawAttachment]]:
    """Pair every attachment of an outcome with its artifact key."""
    seen: dict[str, int] = {}
    items: list[tuple[ArtifactKey, RawAttachment]] = []
    for attachment in outcome.raw_attachments:
        occurrence = seen.get(attachment.name, 0) + 1
        seen[attachment.name] = occurrence
        key = artifact_key(
            outcome.suite_path,
            outcome.spec_title,
            outcome.project_name,
            outcome.attempt_index,
            attachment.name,
            occurrence,
            outcome.repeat_index,
        )
        items.append((key, attachment))
    return items


def content_type_for(attachment: RawAttachment) -> str:
    """Declared content type, else one inferred from the name's extension."""
    if attachment.content_type:
        return attachment.content_type
    extension = PurePosixPath(attachment.name).suffix.lower()
    return CONTENT_TYPES_BY_EXTENSION.get(extension, DEFAULT_CONTENT_TYPE)
