"""Upload attachment bytes to a blob store concurrently."""

import asyncio
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

from testrun.evidence_pipeline.errors import ArtifactUploadError, ByteSourceReadError
from testrun.evidence_pipeline.extractor import content_type_for
from testrun.evidence_pipeline.models.outcome import (
    ArtifactKey,
    FileReference,
    RawAttachment,
)
from testrun.evidence_pipeline.models.record import UploadedArtifact
from testrun.evidence_pipeline.stores.base import BlobStore

logger = logging.getLogger(__name__)


class ArtifactStager:
    """Fans artifact uploads out to a blob store and collects the results."""

    def __init__(
        self,
        store: BlobStore,
        work_dir: Path,
        max_concurrency: int | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize stager.

        Args:
            store: Blob store receiving the artifacts
            work_dir: Directory relative attachment paths are resolved against
            max_concurrency: Maximum uploads in flight (unbounded if None)
            timeout: Seconds to wait for all uploads (unbounded if None)

        """
        self.store = store
        self.work_dir = work_dir
        self.timeout = timeout
        self._semaphore = (
            asyncio.Semaphore(max_concurrency) if max_concurrency else None
        )

    async def stage(
        self, items: Iterable[tuple[ArtifactKey, RawAttachment]]
    ) -> tuple[Mapping[ArtifactKey, UploadedArtifact], list[ArtifactUploadError]]:
        """Upload every item and wait until all uploads have settled.

        Returns:
            Tuple of (read-only map of uploaded artifacts, per-key failures)

        Raises:
            ValueError: If two items share a key; nothing is uploaded then

        """
        items = list(items)
        staged_keys: set[ArtifactKey] = set()
        for key, _ in items:
            if key in staged_keys:
                raise ValueError(f"Duplicate artifact key: {key}")
            staged_keys.add(key)

        tasks: dict[asyncio.Task[UploadedArtifact], ArtifactKey] = {}
        for key, attachment in items:
            task = asyncio.create_task(self._upload(key, attachment))
            tasks[task] = key

        if not tasks:
            return MappingProxyType({}), []

        logger.info(f"Uploading {len(tasks)} artifacts...")
        done, pending = await asyncio.wait(tasks, timeout=self.timeout)

        failures: list[ArtifactUploadError] = []
        if pending:
            logger.error(
                f"{len(pending)} uploads still pending after {self.timeout}s, "
                "cancelling"
            )
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            for task in pending:
                failures.append(
                    ArtifactUploadError(
                        tasks[task], f"upload timed out after {self.timeout}s"
                    )
                )

        uploaded: dict[ArtifactKey, UploadedArtifact] = {}
        for task in done:
            error = task.exception()
            if error is None:
                artifact = task.result()
                uploaded[tasks[task]] = artifact
            elif isinstance(error, ArtifactUploadError):
                failures.append(error)
            else:
                failures.append(ArtifactUploadError(tasks[task], error))

        for failure in failures:
            logger.error(f"Artifact upload failed: {failure}", exc_info=failure)
        logger.info(f"Uploaded {len(uploaded)} artifacts, {len(failures)} failed")

        failures.sort(key=lambda failure: failure.key)
        return MappingProxyType(uploaded), failures

    async def _upload(
        self, key: ArtifactKey, attachment: RawAttachment
    ) -> UploadedArtifact:
        """Upload one artifact, waiting for a concurrency slot if bounded."""
        if self._semaphore is None:
            return await self._upload_one(key, attachment)
        async with self._semaphore:
            return await self._upload_one(key, attachment)

    async def _upload_one(
        self, key: ArtifactKey, attachment: RawAttachment
    ) -> UploadedArtifact:
        """Read, upload, and describe one artifact."""
        data = await self._read_bytes(key, attachment)
        content_type = content_type_for(attachment)

        try:
            url = await self.store.put(key, data, content_type)
        except Exception as e:
            raise ArtifactUploadError(key, e) from e

        if not url:
            raise ArtifactUploadError(key, "store returned an empty URL")

        logger.debug(f"Uploaded {key} -> {url}")
        return UploadedArtifact(key=key, url=url, content_type=content_type)

    async def _read_bytes(self, key: ArtifactKey, attachment: RawAttachment) -> bytes:
        """Resolve the bytes of an attachment."""
        source = attachment.source
        if not isinstance(source, FileReference):
            return source.data

        path = source.path
        if not path.is_absolute():
            path = self.work_dir / path
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise ByteSourceReadError(key, e) from e
