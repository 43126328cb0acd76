"""
Adapter factory: wraps whatever connection object the caller holds.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.engine import Connection as SAConnection

from bulk_db.io.connectors.base import Connection
from bulk_db.io.connectors.dbapi_connection import DBAPIConnection
from bulk_db.io.connectors.sqlalchemy_connection import SQLAlchemyConnection


def as_connection(connection: Any) -> Connection:
    """
    Return a Connection for the given object.

    Objects that already provide the capability (``driver_name``,
    ``placeholder`` and ``prepare``) are returned unchanged; SQLAlchemy
    connections and DB-API connections are wrapped.
    """
    if all(hasattr(connection, attr) for attr in ("driver_name", "placeholder", "prepare")):
        return connection
    if isinstance(connection, SAConnection):
        return SQLAlchemyConnection(connection)
    return DBAPIConnection(connection)
