"""
Shared contract for multi-row statement builders.
"""

from typing import Protocol, Sequence

DEFAULT_PLACEHOLDER = "?"


class StatementBuilder(Protocol):
    """Protocol for builders producing one statement for N row operations."""

    name: str
    placeholder: str

    def build(self, table: str, fields: Sequence[str], num_records: int) -> str: ...


def check_record_count(num_records: int) -> None:
    """Reject statement sizes below one row operation."""
    if num_records < 1:
        raise ValueError(
            f"The number of records must be 1 or more, got {num_records}."
        )
