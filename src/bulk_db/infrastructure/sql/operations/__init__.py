"""Multi-row statement builders."""

from .base import DEFAULT_PLACEHOLDER, StatementBuilder
from .delete import DeleteBuilder
from .insert import InsertBuilder

__all__ = [
    "DEFAULT_PLACEHOLDER",
    "DeleteBuilder",
    "InsertBuilder",
    "StatementBuilder",
]
