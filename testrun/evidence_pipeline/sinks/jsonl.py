"""Record sink appending rows to a JSON Lines file."""

import asyncio
from collections.abc import Sequence
from pathlib import Path

from testrun.evidence_pipeline.models.record import TabularRecord
from testrun.evidence_pipeline.models.store_config import JsonLinesSinkConfig
from testrun.evidence_pipeline.sinks.base import RecordSink


class JsonLinesRecordSink(RecordSink):
    """Local JSON Lines file sink."""

    def __init__(self, config: JsonLinesSinkConfig) -> None:
        """Initialize sink with configuration."""
        self.config = config
        self.path = Path(config.path)

    async def append_records(self, rows: Sequence[TabularRecord]) -> None:
        """Append one JSON object per row."""
        if not rows:
            return
        lines = "".join(f"{row.model_dump_json()}\n" for row in rows)
        await asyncio.to_thread(self._append, lines)

    def _append(self, lines: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(lines)
