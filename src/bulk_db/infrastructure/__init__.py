"""
Infrastructure Layer

Reusable services that support the batching core without owning its state.

Components:
- sql: identifier quoting, dialect resolution and multi-row statement builders

Usage:
    from bulk_db.infrastructure.sql import InsertBuilder, quote_identifier
"""

__all__: list[str] = []
