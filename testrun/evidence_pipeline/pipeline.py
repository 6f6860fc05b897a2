"""Evidence pipeline coordinating walk, upload, and projection of a report."""

import logging
from collections.abc import Mapping
from pathlib import Path

from testrun.evidence_pipeline.extractor import extract
from testrun.evidence_pipeline.models.outcome import ArtifactKey, RawAttachment
from testrun.evidence_pipeline.models.record import PipelineResult, UploadFailure
from testrun.evidence_pipeline.models.report import TestRunReport
from testrun.evidence_pipeline.projector import project
from testrun.evidence_pipeline.stager import ArtifactStager
from testrun.evidence_pipeline.stores.base import BlobStore
from testrun.evidence_pipeline.walker import walk

logger = logging.getLogger(__name__)


class EvidencePipeline:
    """Turns a test-run report into records with uploaded evidence links."""

    def __init__(
        self,
        store: BlobStore,
        max_concurrency: int | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize pipeline with a blob store and upload limits."""
        self.store = store
        self.max_concurrency = max_concurrency
        self.timeout = timeout

    async def run(
        self,
        report: TestRunReport | Mapping[str, object],
        work_dir: Path,
    ) -> PipelineResult:
        """Walk the report, upload its attachments, and project the records.

        The whole report is walked before any upload starts, so a malformed
        report fails without side effects.

        Raises:
            MalformedReportError: If the report is structurally invalid

        """
        logger.info("Pipeline: Walking report...")
        outcomes = list(walk(report))
        logger.info(f"Found {len(outcomes)} test attempts")

        items: list[tuple[ArtifactKey, RawAttachment]] = []
        for outcome in outcomes:
            items.extend(extract(outcome))
        logger.info(f"Extracted {len(items)} attachments")

        stager = ArtifactStager(
            self.store,
            work_dir,
            max_concurrency=self.max_concurrency,
            timeout=self.timeout,
        )
        uploaded, failures = await stager.stage(items)

        logger.info("Pipeline: Projecting records...")
        records, warnings = project(outcomes, uploaded, failures)
        logger.info(
            f"Projected {len(records)} records with {len(warnings)} missing artifacts"
        )

        return PipelineResult(
            records=records,
            warnings=warnings,
            failures=[
                UploadFailure(key=failure.key, error=str(failure.cause))
                for failure in failures
            ],
        )
