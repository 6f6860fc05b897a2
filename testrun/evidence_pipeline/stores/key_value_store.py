"""Apify key-value store blob store implementation."""

import hashlib
import re

import aiohttp

from testrun.evidence_pipeline.models.store_config import KeyValueStoreConfig
from testrun.evidence_pipeline.stores.base import BlobStore

MAX_RECORD_KEY_LENGTH = 256
_DIGEST_LENGTH = 16
_INVALID_RECORD_KEY_CHARS = re.compile(r"[^A-Za-z0-9!\-_.'()]+")


def record_key_for(key: str) -> str:
    """Map an artifact key to a valid, collision-free record key.

    Record keys allow only ``[A-Za-z0-9!-_.'()]`` and at most 256 characters,
    so the key is reduced to a digest of the full key plus a readable tail.
    """
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:_DIGEST_LENGTH]
    readable = _INVALID_RECORD_KEY_CHARS.sub("-", key).strip("-")
    tail = readable[-(MAX_RECORD_KEY_LENGTH - _DIGEST_LENGTH - 1) :]
    return f"{digest}-{tail}" if tail else digest


class KeyValueStoreBlobStore(BlobStore):
    """Apify key-value store."""

    def __init__(self, config: KeyValueStoreConfig) -> None:
        """Initialize key-value store with configuration."""
        self.config = config
        self.base_url = config.base_url.rstrip("/")

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store the blob as a record and return the record URL."""
        record_url = (
            f"{self.base_url}/key-value-stores/{self.config.store_id}/"
            f"records/{record_key_for(key)}"
        )
        headers = {
            "Authorization": f"Bearer {self.config.token}",
            "Content-Type": content_type,
        }

        async with aiohttp.ClientSession() as session:
            async with session.put(record_url, headers=headers, data=data) as response:
                if response.status not in {200, 201}:
                    text = await response.text()
                    raise RuntimeError(
                        f"Failed to store record: {response.status} {text}"
                    )

        return record_url
