"""
SQL identifier handling utilities.

Quoting is a plain wrap: the identifier is enclosed in the dialect's quote
character and embedded quote characters are passed through untouched, so
callers must supply well-formed identifiers.
"""

from .dialect import is_postgres_family

DOUBLE_QUOTE = '"'
BACKTICK = "`"


def identifier_quote_character(dialect: str) -> str:
    """
    Return the identifier quote character for a dialect.

    Postgres-family dialects use double quotes. Every other dialect,
    including unknown ones, uses backticks.

    Examples:
        >>> identifier_quote_character("pgsql")
        '"'
        >>> identifier_quote_character("mysql")
        '`'
    """
    if is_postgres_family(dialect):
        return DOUBLE_QUOTE
    return BACKTICK


def quote_identifier(name: str, dialect: str) -> str:
    """
    Quote a SQL identifier (table or column name).

    Args:
        name: The identifier to quote
        dialect: Database dialect tag or driver name

    Returns:
        The identifier wrapped in the dialect's quote character

    Examples:
        >>> quote_identifier("users", "postgresql")
        '"users"'
        >>> quote_identifier("users", "sqlite")
        '`users`'
    """
    quote = identifier_quote_character(dialect)
    return f"{quote}{name}{quote}"
