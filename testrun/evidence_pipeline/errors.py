"""Exceptions raised by the evidence pipeline."""


class EvidencePipelineError(Exception):
    """Base class for evidence pipeline errors."""


class MalformedReportError(EvidencePipelineError):
    """Report document is structurally invalid.

    Fatal: raised before any artifact is uploaded.
    """


class ArtifactUploadError(EvidencePipelineError):
    """Upload of a single artifact failed."""

    def __init__(self, key: str, cause: BaseException | str) -> None:
        """Initialize with the failing artifact key and the underlying cause."""
        self.key = key
        self.cause = cause
        super().__init__(f"{key}: {cause}")


class ByteSourceReadError(ArtifactUploadError):
    """Bytes of a file-backed attachment could not be read."""
