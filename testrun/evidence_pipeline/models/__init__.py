"""Data models for reports, outcomes, records, and adapter configuration."""

from testrun.evidence_pipeline.models.outcome import (
    ArtifactKey,
    FileReference,
    InlineBytes,
    RawAttachment,
    TestOutcome,
)
from testrun.evidence_pipeline.models.record import (
    ArtifactLink,
    PipelineResult,
    ProjectionWarning,
    TabularRecord,
    UploadedArtifact,
    UploadFailure,
)
from testrun.evidence_pipeline.models.report import (
    AttemptStatus,
    ReportAttachment,
    ReportError,
    ReportSpec,
    ReportSuite,
    ReportTest,
    ReportTestResult,
    TestRunReport,
)
from testrun.evidence_pipeline.models.store_config import (
    DatasetSinkConfig,
    FilesystemStoreConfig,
    HttpStoreConfig,
    JsonLinesSinkConfig,
    KeyValueStoreConfig,
)

__all__ = [
    "ArtifactKey",
    "ArtifactLink",
    "AttemptStatus",
    "DatasetSinkConfig",
    "FileReference",
    "FilesystemStoreConfig",
    "HttpStoreConfig",
    "InlineBytes",
    "JsonLinesSinkConfig",
    "KeyValueStoreConfig",
    "PipelineResult",
    "ProjectionWarning",
    "RawAttachment",
    "ReportAttachment",
    "ReportError",
    "ReportSpec",
    "ReportSuite",
    "ReportTest",
    "ReportTestResult",
    "TabularRecord",
    "TestOutcome",
    "TestRunReport",
    "UploadFailure",
    "UploadedArtifact",
]
