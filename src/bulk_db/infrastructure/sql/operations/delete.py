"""
Multi-row DELETE statement builder.

Each row operation becomes one parenthesised AND-group of field equality
tests; the groups are OR-ed together. A table holding several rows with the
same key tuple loses all of them, so more rows can be deleted than
operations were queued.
"""

from typing import Sequence

from .base import DEFAULT_PLACEHOLDER, check_record_count


class DeleteBuilder:
    """
    Builds one DELETE statement matching any of N key tuples.

    Example:
        >>> builder = DeleteBuilder()
        >>> builder.build('"users"', ['"id"'], 2)
        'DELETE FROM "users" WHERE ("id" = ?) OR ("id" = ?)'
    """

    name = "delete"

    def __init__(self, placeholder: str = DEFAULT_PLACEHOLDER):
        self.placeholder = placeholder

    def build(self, table: str, fields: Sequence[str], num_records: int) -> str:
        """
        Build the DELETE statement.

        Args:
            table: Quoted table name
            fields: Quoted key field names, in buffer order
            num_records: Number of key tuples the statement matches

        Returns:
            DELETE SQL statement with ``num_records`` OR-ed predicate groups
        """
        check_record_count(num_records)

        predicate = " AND ".join(f"{field} = {self.placeholder}" for field in fields)
        where = " OR ".join([f"({predicate})"] * num_records)

        return f"DELETE FROM {table} WHERE {where}"
