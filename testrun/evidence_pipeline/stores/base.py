"""Abstract base class for artifact blob stores."""

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Abstract base for stores that keep artifact bytes under a key."""

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store bytes under a key and return the URL they can be fetched from.

        Implementations must be safe to call concurrently for distinct keys.
        Writing an existing key overwrites it.

        Args:
            key: Artifact key (may contain '/', '#', spaces and '%' escapes)
            data: Blob content
            content_type: MIME type to store the blob with

        Returns:
            Retrieval URL for the stored blob

        """
