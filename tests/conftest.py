"""Pytest configuration and shared database fixtures.

SQLite fixtures run everywhere. PostgreSQL-backed tests are opt-in: they
need DATABASE_URL (or BULK_DB_TEST_DATABASE_URL) pointing at a PostgreSQL
database whose name marks it as a test database.
"""

from __future__ import annotations

import os
import re
import sqlite3
from typing import Generator, Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Connection as SAConnection
from sqlalchemy.engine.url import make_url

from bulk_db.config import get_settings
from tests.fixtures.fake_connection import FakeConnection

USERS_DDL = "CREATE TABLE users (id INTEGER NOT NULL, name TEXT)"


def _validate_test_database(dsn: str) -> bool:
    """Ensure we're not connected to a production database.

    Args:
        dsn: Database connection string (SQLAlchemy URL format)

    Returns:
        True if the database name matches the test naming pattern

    Raises:
        RuntimeError: If the database name doesn't match the test pattern
    """
    if os.getenv("BULK_DB_SKIP_DB_VALIDATION") == "1":
        return True

    db_name = make_url(dsn).database

    if not db_name:
        raise RuntimeError(
            "Refusing to run tests against empty/missing database name. "
            "Test databases must contain one of: test, tmp, dev, local, sandbox. "
            "Override with BULK_DB_SKIP_DB_VALIDATION=1 (DANGEROUS)."
        )

    if not re.search(r"(test|tmp|dev|local|sandbox)", db_name, re.IGNORECASE):
        raise RuntimeError(
            f"Refusing to run tests against non-test database: {db_name}. "
            "Test databases must contain one of: test, tmp, dev, local, sandbox. "
            "Override with BULK_DB_SKIP_DB_VALIDATION=1 (DANGEROUS)."
        )
    return True


def _resolve_postgres_dsn() -> str:
    database_url = os.environ.get("BULK_DB_TEST_DATABASE_URL") or os.environ.get(
        "DATABASE_URL"
    )
    if not database_url or not database_url.startswith("postgres"):
        pytest.skip(
            "PostgreSQL DATABASE_URL/BULK_DB_TEST_DATABASE_URL must be set "
            "for postgres-backed tests"
        )
    return database_url.replace("postgres://", "postgresql://", 1)


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_connection() -> FakeConnection:
    """Recording connection reporting a backtick-quoting driver."""
    return FakeConnection()


@pytest.fixture
def sqlite_connection() -> Generator[sqlite3.Connection, None, None]:
    """In-memory stdlib sqlite3 connection with a ``users`` table."""
    conn = sqlite3.connect(":memory:")
    conn.execute(USERS_DDL)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def sqlalchemy_connection() -> Generator[SAConnection, None, None]:
    """In-memory SQLite through SQLAlchemy with a ``users`` table."""
    engine = create_engine("sqlite:///:memory:")
    try:
        with engine.connect() as conn:
            conn.exec_driver_sql(USERS_DDL)
            yield conn
    finally:
        engine.dispose()


@pytest.fixture
def postgres_connection() -> Generator[SAConnection, None, None]:
    """SQLAlchemy connection to the PostgreSQL test database.

    A ``TEMPORARY`` scratch table ``bulk_db_users`` is created inside an
    outer transaction that is rolled back after the test, so neither the
    table nor its rows persist.
    """
    dsn = _resolve_postgres_dsn()
    _validate_test_database(dsn)

    engine = create_engine(dsn)
    try:
        with engine.connect() as conn:
            trans = conn.begin()
            conn.exec_driver_sql(
                "CREATE TEMPORARY TABLE bulk_db_users "
                "(id INTEGER NOT NULL, name TEXT)"
            )
            try:
                yield conn
            finally:
                trans.rollback()
    finally:
        engine.dispose()
