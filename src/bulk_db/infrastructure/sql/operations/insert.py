"""
Multi-row INSERT statement builder.
"""

from typing import Sequence

from .base import DEFAULT_PLACEHOLDER, check_record_count


class InsertBuilder:
    """
    Builds one INSERT statement that adds N rows in a single round trip.

    Identifiers are expected to be quoted already.

    Example:
        >>> builder = InsertBuilder()
        >>> builder.build('"users"', ['"id"', '"name"'], 2)
        'INSERT INTO "users" ("id", "name") VALUES (?, ?), (?, ?)'
    """

    name = "insert"

    def __init__(self, placeholder: str = DEFAULT_PLACEHOLDER):
        self.placeholder = placeholder

    def build(self, table: str, fields: Sequence[str], num_records: int) -> str:
        """
        Build the INSERT statement.

        Args:
            table: Quoted table name
            fields: Quoted field names, in buffer order
            num_records: Number of rows the statement inserts

        Returns:
            INSERT SQL statement with ``num_records`` parameter groups
        """
        check_record_count(num_records)

        columns = ", ".join(fields)
        group = "(" + ", ".join([self.placeholder] * len(fields)) + ")"
        values = ", ".join([group] * num_records)

        return f"INSERT INTO {table} ({columns}) VALUES {values}"
