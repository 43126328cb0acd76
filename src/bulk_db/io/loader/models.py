from dataclasses import dataclass


@dataclass(frozen=True)
class OperatorStats:
    """Point-in-time snapshot of a bulk operator's counters."""

    table: str
    batch_size: int
    total_queued: int
    pending_count: int
    affected_rows: int

    @property
    def flushed_count(self) -> int:
        return self.total_queued - self.pending_count
