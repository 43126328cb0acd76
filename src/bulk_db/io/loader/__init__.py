"""
Bulk loader for bulk-db.

Batches row inserts and deletes so that many logical operations reach the
database through a few multi-row statements.
"""

from bulk_db.io.exceptions import (
    BulkOperatorError,
    ConfigurationError,
    ExecutionError,
    InvalidInputError,
)

from .bulk_operator import BulkDeleter, BulkInserter, BulkOperator
from .models import OperatorStats

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
