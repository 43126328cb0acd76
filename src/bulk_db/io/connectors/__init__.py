"""Connection adapters exposing the capability the bulk operators consume."""

from .base import (
    PARAMSTYLE_PLACEHOLDERS,
    Connection,
    PreparedStatement,
    placeholder_for_paramstyle,
)
from .adapter_factory import as_connection
from .dbapi_connection import DBAPIConnection, DBAPIPreparedStatement
from .sqlalchemy_connection import (
    SQLAlchemyConnection,
    SQLAlchemyPreparedStatement,
    connect,
)

__all__ = [
    "PARAMSTYLE_PLACEHOLDERS",
    "Connection",
    "DBAPIConnection",
    "DBAPIPreparedStatement",
    "PreparedStatement",
    "SQLAlchemyConnection",
    "SQLAlchemyPreparedStatement",
    "as_connection",
    "connect",
    "placeholder_for_paramstyle",
]
