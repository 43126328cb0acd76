"""
bulk-db - batched row inserts and deletes over a single database connection.

Many logical row operations are buffered and committed with a small number of
multi-row statement executions.

Usage:
    >>> from bulk_db import BulkInserter
    >>> with BulkInserter(conn, "users", ["id", "name"], batch_size=500) as op:
    ...     for user_id, name in rows:
    ...         op.queue(user_id, name)
"""

from bulk_db.io.exceptions import (
    BulkOperatorError,
    ConfigurationError,
    ExecutionError,
    InvalidInputError,
)
from bulk_db.io.loader import BulkDeleter, BulkInserter, BulkOperator, OperatorStats

__version__ = "0.1.0"

__all__ = [
    "BulkDeleter",
    "BulkInserter",
    "BulkOperator",
    "BulkOperatorError",
    "ConfigurationError",
    "ExecutionError",
    "InvalidInputError",
    "OperatorStats",
]
