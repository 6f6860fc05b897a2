"""Abstract base class for record sinks."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from testrun.evidence_pipeline.models.record import TabularRecord


class RecordSink(ABC):
    """Append-only tabular store for pipeline records."""

    @abstractmethod
    async def append_records(self, rows: Sequence[TabularRecord]) -> None:
        """Append rows in the given order."""
