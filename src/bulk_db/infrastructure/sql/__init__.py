"""
SQL module for statement generation.

Provides identifier quoting per dialect and the multi-row INSERT / DELETE
builders consumed by the bulk operators.
"""

from .core.dialect import is_postgres_family, resolve_dialect
from .core.identifier import identifier_quote_character, quote_identifier
from .operations.base import DEFAULT_PLACEHOLDER, StatementBuilder
from .operations.delete import DeleteBuilder
from .operations.insert import InsertBuilder

__all__ = [
    "DEFAULT_PLACEHOLDER",
    "DeleteBuilder",
    "InsertBuilder",
    "StatementBuilder",
    "identifier_quote_character",
    "is_postgres_family",
    "quote_identifier",
    "resolve_dialect",
]
