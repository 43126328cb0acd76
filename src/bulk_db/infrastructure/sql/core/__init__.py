"""Core SQL utilities package."""

from .dialect import is_postgres_family, resolve_dialect
from .identifier import identifier_quote_character, quote_identifier

__all__ = [
    "identifier_quote_character",
    "is_postgres_family",
    "quote_identifier",
    "resolve_dialect",
]
