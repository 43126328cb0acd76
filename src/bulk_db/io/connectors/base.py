"""
Connection capability consumed by the bulk operators.

An operator needs three things from a connection: the driver name (to pick
an identifier quote character), a way to prepare SQL text, and a way to run
a prepared statement with a flat list of positional parameters and learn how
many rows it affected.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from bulk_db.io.exceptions import ConfigurationError

# PEP 249 paramstyles with positional, anonymous placeholders
PARAMSTYLE_PLACEHOLDERS = {
    "qmark": "?",
    "format": "%s",
    "pyformat": "%s",
}


@runtime_checkable
class PreparedStatement(Protocol):
    """A statement that can be executed repeatedly with new parameters."""

    sql: str

    def execute(self, params: Sequence[Any]) -> int:
        """Execute with positional parameters and return the affected row count."""
        ...


@runtime_checkable
class Connection(Protocol):
    """The connection/driver capability."""

    @property
    def driver_name(self) -> str: ...

    @property
    def placeholder(self) -> str: ...

    def prepare(self, sql: str) -> PreparedStatement: ...


def placeholder_for_paramstyle(paramstyle: str) -> str:
    """
    Map a PEP 249 paramstyle to its positional placeholder.

    Raises:
        ConfigurationError: If the paramstyle has no anonymous positional form

    Examples:
        >>> placeholder_for_paramstyle("qmark")
        '?'
        >>> placeholder_for_paramstyle("pyformat")
        '%s'
    """
    try:
        return PARAMSTYLE_PLACEHOLDERS[paramstyle]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported paramstyle {paramstyle!r}. "
            f"Supported: {sorted(PARAMSTYLE_PLACEHOLDERS)}"
        ) from None
