"""Blob store writing artifacts into a local directory."""

import asyncio
from pathlib import Path
from urllib.parse import quote

from testrun.evidence_pipeline.models.store_config import FilesystemStoreConfig
from testrun.evidence_pipeline.stores.base import BlobStore


class FilesystemBlobStore(BlobStore):
    """Local directory blob store."""

    def __init__(self, config: FilesystemStoreConfig) -> None:
        """Initialize filesystem store with configuration."""
        self.config = config
        self.root = Path(config.root)

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        """Write the blob to a flat file named after the encoded key."""
        file_name = quote(key, safe="")
        target = self.root / file_name
        await asyncio.to_thread(self._write, target, data)

        if self.config.base_url:
            return f"{self.config.base_url.rstrip('/')}/{quote(file_name, safe='')}"
        return target.resolve().as_uri()

    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
