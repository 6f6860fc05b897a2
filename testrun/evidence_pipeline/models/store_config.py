"""Configuration models for blob stores and record sinks."""

from pydantic import BaseModel, Field


class FilesystemStoreConfig(BaseModel):
    """Configuration for the local directory blob store."""

    root: str = Field(..., description="Directory blobs are written to")
    base_url: str | None = Field(
        default=None,
        description="Public URL the directory is served under; file:// if unset",
    )


class HttpStoreConfig(BaseModel):
    """Configuration for a plain HTTP PUT blob store."""

    base_url: str = Field(..., description="URL prefix objects are PUT under")
    token: str | None = Field(default=None, description="Bearer token")


class KeyValueStoreConfig(BaseModel):
    """Configuration for an Apify key-value store."""

    token: str = Field(..., description="Apify API token")
    store_id: str = Field(..., description="Key-value store ID or name")
    base_url: str = Field(
        default="https://api.apify.com/v2", description="Apify API base URL"
    )


class JsonLinesSinkConfig(BaseModel):
    """Configuration for the local JSON Lines record sink."""

    path: str = Field(..., description="File rows are appended to")


class DatasetSinkConfig(BaseModel):
    """Configuration for an Apify dataset record sink."""

    token: str = Field(..., description="Apify API token")
    dataset_id: str = Field(..., description="Dataset ID or name")
    base_url: str = Field(
        default="https://api.apify.com/v2", description="Apify API base URL"
    )
