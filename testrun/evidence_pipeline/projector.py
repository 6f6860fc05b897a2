"""Join outcomes with uploaded artifacts into sink-facing records."""

import logging
from collections.abc import Iterable, Mapping

from testrun.evidence_pipeline.errors import ArtifactUploadError
from testrun.evidence_pipeline.extractor import extract
from testrun.evidence_pipeline.models.outcome import ArtifactKey, TestOutcome
from testrun.evidence_pipeline.models.record import (
    ArtifactLink,
    ProjectionWarning,
    TabularRecord,
    UploadedArtifact,
)

logger = logging.getLogger(__name__)

SUITE_PATH_SEPARATOR = " > "


def project(
    outcomes: Iterable[TestOutcome],
    uploaded: Mapping[ArtifactKey, UploadedArtifact],
    failures: Iterable[ArtifactUploadError] = (),
) -> tuple[list[TabularRecord], list[ProjectionWarning]]:
    """Build one record per outcome, linking only uploaded artifacts.

    Attachments without an upload are left out of their record and reported
    as warnings instead.

    Args:
        outcomes: Outcomes in walk order
        uploaded: Uploaded artifacts by key
        failures: Known upload failures, used to explain missing artifacts

    Returns:
        Tuple of (records in outcome order, warnings for omitted artifacts)

    """
    reasons = {failure.key: str(failure.cause) for failure in failures}
    records: list[TabularRecord] = []
    warnings: list[ProjectionWarning] = []

    for outcome in outcomes:
        suite_path = SUITE_PATH_SEPARATOR.join(outcome.suite_path)
        artifacts: list[ArtifactLink] = []

        for key, attachment in extract(outcome):
            artifact = uploaded.get(key)
            if artifact is None:
                reason = reasons.get(key, "not uploaded")
                logger.warning(f"Omitting artifact {key}: {reason}")
                warnings.append(
                    ProjectionWarning(
                        key=key,
                        suite_path=suite_path,
                        spec_title=outcome.spec_title,
                        project_name=outcome.project_name,
                        attempt_index=outcome.attempt_index,
                        repeat_index=outcome.repeat_index,
                        attachment_name=attachment.name,
                        reason=reason,
                    )
                )
                continue

            artifacts.append(
                ArtifactLink(
                    name=attachment.name,
                    url=artifact.url,
                    content_type=artifact.content_type,
                )
            )

        records.append(
            TabularRecord(
                suite_path=suite_path,
                spec_title=outcome.spec_title,
                project_name=outcome.project_name,
                attempt_index=outcome.attempt_index,
                repeat_index=outcome.repeat_index,
                status=outcome.status,
                duration_ms=outcome.duration_ms,
                error_message=outcome.error_message,
                artifacts=artifacts,
            )
        )

    return records, warnings
