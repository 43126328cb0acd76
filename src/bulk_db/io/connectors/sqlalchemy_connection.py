"""
Adapter for SQLAlchemy connections, plus a helper opening one from settings.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection as SAConnection
from sqlalchemy.pool import NullPool

from bulk_db.config import get_settings
from bulk_db.io.connectors.base import placeholder_for_paramstyle
from bulk_db.io.exceptions import ConfigurationError
from bulk_db.utils.logging import get_logger

logger = get_logger(__name__)


class SQLAlchemyPreparedStatement:
    """SQL text executed through ``Connection.exec_driver_sql``."""

    def __init__(self, connection: SAConnection, sql: str):
        self._connection = connection
        self.sql = sql

    def execute(self, params: Sequence[Any]) -> int:
        result = self._connection.exec_driver_sql(self.sql, tuple(params))
        return result.rowcount

    def __repr__(self) -> str:
        return f"SQLAlchemyPreparedStatement({self.sql!r})"


class SQLAlchemyConnection:
    """
    Wraps a ``sqlalchemy.engine.Connection``.

    The driver name is the SQLAlchemy dialect name (``postgresql``,
    ``sqlite``, ``mysql``); the placeholder follows the DBAPI paramstyle.
    Transactions stay under the caller's control.
    """

    def __init__(self, connection: SAConnection):
        self._connection = connection
        self._placeholder = placeholder_for_paramstyle(connection.dialect.paramstyle)

    @property
    def driver_name(self) -> str:
        return self._connection.dialect.name

    @property
    def placeholder(self) -> str:
        return self._placeholder

    @property
    def raw_connection(self) -> SAConnection:
        return self._connection

    def prepare(self, sql: str) -> SQLAlchemyPreparedStatement:
        return SQLAlchemyPreparedStatement(self._connection, sql)


@contextmanager
def connect(
    database_url: Optional[str] = None, **engine_kwargs: Any
) -> Iterator[SQLAlchemyConnection]:
    """
    Open a single SQLAlchemy connection and yield it wrapped.

    Args:
        database_url: SQLAlchemy URL; defaults to Settings.DATABASE_URL
        **engine_kwargs: Passed through to ``create_engine``

    Raises:
        ConfigurationError: If no URL is given and DATABASE_URL is not set
    """
    url = database_url or get_settings().get_database_connection_string()
    if not url:
        raise ConfigurationError(
            "No database URL given and DATABASE_URL is not configured"
        )

    engine = create_engine(url, poolclass=NullPool, **engine_kwargs)
    try:
        with engine.connect() as conn:
            logger.info("database.connection.opened", dialect=conn.dialect.name)
            yield SQLAlchemyConnection(conn)
    finally:
        engine.dispose()
        logger.info("database.connection.closed")
