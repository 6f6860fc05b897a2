"""Apify dataset record sink implementation."""

from collections.abc import Sequence

import aiohttp

from testrun.evidence_pipeline.models.record import TabularRecord
from testrun.evidence_pipeline.models.store_config import DatasetSinkConfig
from testrun.evidence_pipeline.sinks.base import RecordSink


class DatasetRecordSink(RecordSink):
    """Apify dataset sink."""

    def __init__(self, config: DatasetSinkConfig) -> None:
        """Initialize dataset sink with configuration."""
        self.config = config
        self.base_url = config.base_url.rstrip("/")

    async def append_records(self, rows: Sequence[TabularRecord]) -> None:
        """Push rows to the dataset in a single request."""
        if not rows:
            return

        async with aiohttp.ClientSession() as session:
            url = f"{self.base_url}/datasets/{self.config.dataset_id}/items"
            headers = {"Authorization": f"Bearer {self.config.token}"}
            payload = [row.model_dump(mode="json") for row in rows]

            async with session.post(url, headers=headers, json=payload) as response:
                if response.status != 201:
                    text = await response.text()
                    raise RuntimeError(
                        f"Failed to push dataset items: {response.status} {text}"
                    )
