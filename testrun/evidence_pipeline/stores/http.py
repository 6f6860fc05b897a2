"""Blob store uploading artifacts with HTTP PUT."""

from urllib.parse import quote

import aiohttp

from testrun.evidence_pipeline.models.store_config import HttpStoreConfig
from testrun.evidence_pipeline.stores.base import BlobStore


class HttpBlobStore(BlobStore):
    """Plain HTTP object store (S3-style presigned prefix, WebDAV, nginx)."""

    def __init__(self, config: HttpStoreConfig) -> None:
        """Initialize HTTP store with configuration."""
        self.config = config
        self.base_url = config.base_url.rstrip("/")

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        """PUT the blob under the base URL and return the object URL."""
        url = f"{self.base_url}/{quote(key, safe='/')}"
        headers = {"Content-Type": content_type}
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"

        async with aiohttp.ClientSession() as session:
            async with session.put(url, headers=headers, data=data) as response:
                if response.status not in {200, 201, 204}:
                    text = await response.text()
                    raise RuntimeError(
                        f"Failed to upload object: {response.status} {text}"
                    )

        return url
