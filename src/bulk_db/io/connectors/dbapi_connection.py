"""
Adapter for plain PEP 249 (DB-API 2.0) connections.

Works with ``sqlite3``, ``psycopg2``, ``pymysql`` and any other driver whose
paramstyle is ``qmark``, ``format`` or ``pyformat``.
"""

from __future__ import annotations

import importlib
from typing import Any, Optional, Sequence, Tuple

from bulk_db.io.connectors.base import placeholder_for_paramstyle
from bulk_db.io.exceptions import ConfigurationError


class DBAPIPreparedStatement:
    """SQL text bound to a DB-API connection; each execute uses a fresh cursor."""

    def __init__(self, connection: Any, sql: str):
        self._connection = connection
        self.sql = sql

    def execute(self, params: Sequence[Any]) -> int:
        cursor = self._connection.cursor()
        try:
            cursor.execute(self.sql, tuple(params))
            return cursor.rowcount
        finally:
            cursor.close()

    def __repr__(self) -> str:
        return f"DBAPIPreparedStatement({self.sql!r})"


class DBAPIConnection:
    """
    Wraps a DB-API connection.

    Args:
        connection: An open PEP 249 connection
        driver_name: Overrides the driver name, which otherwise is the nearest
            enclosing module of the connection's class that declares a
            paramstyle (``sqlite3``, ``psycopg2``, ``mysql.connector``, ...)
        paramstyle: Overrides the paramstyle, which otherwise is read from
            the driver module
    """

    def __init__(
        self,
        connection: Any,
        driver_name: Optional[str] = None,
        paramstyle: Optional[str] = None,
    ):
        self._connection = connection
        module_path = type(connection).__module__
        if paramstyle is None:
            module_name, paramstyle = self._detect_paramstyle(module_path)
        else:
            module_name = self._find_driver_module(module_path)[0]
        self._driver_name = driver_name or module_name
        self._placeholder = placeholder_for_paramstyle(paramstyle)

    @staticmethod
    def _find_driver_module(module_path: str) -> Tuple[str, Optional[str]]:
        """
        Walk up ``module_path`` to the first module declaring a paramstyle.

        ``mysql.connector.connection_cext`` resolves to ``mysql.connector``;
        ``psycopg2.extensions`` to ``psycopg2``. When no module declares one,
        the root module name is returned with no paramstyle.
        """
        parts = module_path.split(".")
        while parts:
            name = ".".join(parts)
            try:
                module = importlib.import_module(name)
            except ImportError:
                module = None
            paramstyle = getattr(module, "paramstyle", None)
            if paramstyle is not None:
                return name, paramstyle
            parts.pop()
        return module_path.split(".", 1)[0], None

    @classmethod
    def _detect_paramstyle(cls, module_path: str) -> Tuple[str, str]:
        module_name, paramstyle = cls._find_driver_module(module_path)
        if paramstyle is None:
            raise ConfigurationError(
                f"Cannot detect paramstyle: no module in {module_path!r} "
                "declares one; pass paramstyle explicitly"
            )
        return module_name, paramstyle

    @property
    def driver_name(self) -> str:
        return self._driver_name

    @property
    def placeholder(self) -> str:
        return self._placeholder

    @property
    def raw_connection(self) -> Any:
        return self._connection

    def prepare(self, sql: str) -> DBAPIPreparedStatement:
        return DBAPIPreparedStatement(self._connection, sql)
