"""
End-to-end tests of the bulk operators against in-memory SQLite.

Covers both the stdlib sqlite3 DB-API adapter and the SQLAlchemy adapter.
"""

import pytest

from bulk_db.io.connectors import DBAPIConnection, SQLAlchemyConnection
from bulk_db.io.exceptions import ExecutionError
from bulk_db.io.loader import BulkDeleter, BulkInserter


def _rows(conn, sql="SELECT id, name FROM users ORDER BY id"):
    return [tuple(r) for r in conn.execute(sql).fetchall()]


@pytest.mark.integration
class TestSqlite3:
    def test_insert_in_batches(self, sqlite_connection):
        inserter = BulkInserter(sqlite_connection, "users", ["id", "name"], batch_size=3)

        flushes = [inserter.queue(i, f"user{i}") for i in range(1, 8)]
        inserter.flush()

        assert flushes.count(True) == 2
        assert inserter.affected_rows == 7
        assert inserter.flushed_count == 7
        assert _rows(sqlite_connection) == [(i, f"user{i}") for i in range(1, 8)]

    def test_identifiers_quoted_with_backticks(self, sqlite_connection):
        inserter = BulkInserter(sqlite_connection, "users", ["id"], batch_size=2)

        assert inserter.statement.sql == "INSERT INTO `users` (`id`) VALUES (?), (?)"

    def test_delete_by_key(self, sqlite_connection):
        sqlite_connection.executemany(
            "INSERT INTO users (id, name) VALUES (?, ?)",
            [(i, f"user{i}") for i in range(1, 6)],
        )
        deleter = BulkDeleter(sqlite_connection, "users", ["id"], batch_size=2)

        deleter.queue(1)
        deleter.queue(3)
        deleter.queue(5)
        deleter.flush()

        assert deleter.affected_rows == 3
        assert _rows(sqlite_connection) == [(2, "user2"), (4, "user4")]

    def test_delete_with_composite_key(self, sqlite_connection):
        sqlite_connection.executemany(
            "INSERT INTO users (id, name) VALUES (?, ?)",
            [(1, "a"), (1, "b"), (2, "a")],
        )

        with BulkDeleter(sqlite_connection, "users", ["id", "name"], batch_size=10) as deleter:
            deleter.queue(1, "b")
            deleter.queue(2, "a")

        assert _rows(sqlite_connection) == [(1, "a")]

    def test_delete_duplicate_key_rows_all_go(self, sqlite_connection):
        """Every row matching a queued key tuple is deleted."""
        sqlite_connection.executemany(
            "INSERT INTO users (id, name) VALUES (?, ?)",
            [(7, "dup"), (7, "dup"), (8, "keep")],
        )
        deleter = BulkDeleter(sqlite_connection, "users", ["id"], batch_size=5)

        deleter.queue(7)
        deleter.flush()

        assert deleter.total_queued == 1
        assert deleter.affected_rows == 2
        assert _rows(sqlite_connection) == [(8, "keep")]

    def test_repeated_key_in_one_batch(self, sqlite_connection):
        sqlite_connection.execute("INSERT INTO users (id, name) VALUES (1, 'a')")
        deleter = BulkDeleter(sqlite_connection, "users", ["id"], batch_size=2)

        assert deleter.queue(1) is False
        assert deleter.queue(1) is True

        assert deleter.affected_rows == 1
        assert _rows(sqlite_connection) == []

    def test_reset_between_files(self, sqlite_connection):
        inserter = BulkInserter(sqlite_connection, "users", ["id", "name"], batch_size=2)

        for batch in ([(1, "a"), (2, "b"), (3, "c")], [(4, "d")]):
            inserter.reset()
            inserter.queue_many(batch)
            inserter.flush()
            assert inserter.affected_rows == len(batch)

        assert len(_rows(sqlite_connection)) == 4

    def test_failed_execute_can_be_retried(self, sqlite_connection):
        sqlite_connection.execute("DROP TABLE users")
        sqlite_connection.execute(
            "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL)"
        )
        inserter = BulkInserter(sqlite_connection, "users", ["id", "name"], batch_size=5)
        inserter.queue(1, None)

        with pytest.raises(ExecutionError):
            inserter.flush()
        assert inserter.pending_count == 1

        inserter.reset()
        inserter.queue(1, "fixed")
        inserter.flush()

        assert _rows(sqlite_connection) == [(1, "fixed")]

    def test_explicit_adapter(self, sqlite_connection):
        conn = DBAPIConnection(sqlite_connection)
        inserter = BulkInserter(conn, "users", ["id", "name"], batch_size=2)

        inserter.queue_many([(1, "a"), (2, "b")])

        assert _rows(sqlite_connection) == [(1, "a"), (2, "b")]


@pytest.mark.integration
class TestSQLAlchemySqlite:
    def test_insert_and_delete(self, sqlalchemy_connection):
        inserter = BulkInserter(sqlalchemy_connection, "users", ["id", "name"], batch_size=4)
        for i in range(10):
            inserter.queue(i, str(i))
        inserter.flush()

        deleter = BulkDeleter(sqlalchemy_connection, "users", ["id"], batch_size=4)
        deleter.queue_many([(i,) for i in range(0, 10, 2)])
        deleter.flush()

        remaining = sqlalchemy_connection.exec_driver_sql(
            "SELECT id FROM users ORDER BY id"
        ).all()

        assert inserter.affected_rows == 10
        assert deleter.affected_rows == 5
        assert [r[0] for r in remaining] == [1, 3, 5, 7, 9]

    def test_wrapped_connection(self, sqlalchemy_connection):
        conn = SQLAlchemyConnection(sqlalchemy_connection)
        inserter = BulkInserter(conn, "users", ["id"], batch_size=3)

        assert inserter.dialect == "sqlite"
        assert inserter.table == "`users`"
