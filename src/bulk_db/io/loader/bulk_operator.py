"""
Bulk operators: buffer row operations and run them as multi-row statements.

A statement for exactly ``batch_size`` operations is prepared once, at
construction, and reused for every full batch. Whatever is left over is run
by ``flush()`` through a statement sized for the remainder.

Example:
    >>> import sqlite3
    >>> conn = sqlite3.connect(":memory:")
    >>> _ = conn.execute("CREATE TABLE users (id INTEGER, name TEXT)")
    >>> inserter = BulkInserter(conn, "users", ["id", "name"], batch_size=2)
    >>> inserter.queue(1, "a")
    False
    >>> inserter.queue(2, "b")
    True
    >>> inserter.queue(3, "c")
    False
    >>> inserter.flush()
    >>> inserter.affected_rows
    3
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from bulk_db.config import get_settings
from bulk_db.infrastructure.sql import (
    DeleteBuilder,
    InsertBuilder,
    StatementBuilder,
    quote_identifier,
    resolve_dialect,
)
from bulk_db.io.connectors import Connection, PreparedStatement, as_connection
from bulk_db.io.exceptions import ConfigurationError, ExecutionError, InvalidInputError
from bulk_db.io.loader.models import OperatorStats
from bulk_db.utils.logging import bind_context


class BulkOperator:
    """
    Queues row operations and executes them in batches.

    Subclasses choose the statement shape through ``builder_class``; a
    builder can also be injected directly.

    Args:
        connection: A Connection, a SQLAlchemy connection or a DB-API connection
        table: Raw table name
        fields: Raw field names, in the order values are queued
        batch_size: Operations per statement; defaults to Settings.BULK_BATCH_SIZE
        builder: Statement builder overriding ``builder_class``

    Raises:
        ConfigurationError: If fields is empty, if batch_size is below 1, or
            if batch_size is omitted and the settings fail to load
    """

    builder_class: Optional[Callable[[str], StatementBuilder]] = None

    def __init__(
        self,
        connection: Any,
        table: str,
        fields: Sequence[str],
        batch_size: Optional[int] = None,
        builder: Optional[StatementBuilder] = None,
    ):
        if batch_size is None:
            try:
                batch_size = get_settings().BULK_BATCH_SIZE
            except ValidationError as e:
                raise ConfigurationError(
                    f"Invalid bulk-db settings: {e}"
                ) from e
        if batch_size < 1:
            raise ConfigurationError(
                "The number of operations per query must be 1 or more."
            )
        if isinstance(fields, str):
            raise ConfigurationError(
                "fields must be a sequence of field names, not a string"
            )

        fields = list(fields)
        if not fields:
            raise ConfigurationError("The field list is empty.")

        if builder is None and self.builder_class is None:
            raise ConfigurationError(
                f"{type(self).__name__} needs a statement builder"
            )

        self._connection: Connection = as_connection(connection)
        self._dialect = resolve_dialect(self._connection.driver_name)

        self._table = quote_identifier(table, self._dialect)
        self._fields: Tuple[str, ...] = tuple(
            quote_identifier(field, self._dialect) for field in fields
        )
        self._num_fields = len(self._fields)
        self._batch_size = batch_size

        self._builder: StatementBuilder = builder or self.builder_class(
            self._connection.placeholder
        )
        self._statement = self._prepare(batch_size)

        self._buffer: List[Any] = []
        self._pending = 0
        self._total = 0
        self._affected_rows = 0

        self._logger = bind_context(
            __name__, table=self._table, operation=self._builder.name
        )
        self._logger.info(
            "bulk.operator.initialized",
            dialect=self._dialect,
            fields=list(self._fields),
            batch_size=batch_size,
        )

    # --- Configuration ------------------------------------------------------------

    @property
    def table(self) -> str:
        """Quoted table name."""
        return self._table

    @property
    def fields(self) -> Tuple[str, ...]:
        """Quoted field names."""
        return self._fields

    @property
    def num_fields(self) -> int:
        return self._num_fields

    @property
    def batch_size(self) -> int:
        return self._batch_size

    @property
    def dialect(self) -> str:
        return self._dialect

    @property
    def statement(self) -> PreparedStatement:
        """The full-batch prepared statement."""
        return self._statement

    # --- Operations ---------------------------------------------------------------

    def queue(self, *values: Any) -> bool:
        """
        Queue one row operation.

        Args:
            *values: One value per field, in field order

        Returns:
            Whether a batch was executed by this call. Only useful for
            progress feedback.

        Raises:
            InvalidInputError: If the number of values does not match the
                field count. Nothing is queued in that case.
            ExecutionError: If the batch statement fails. The batch stays
                pending; ``flush()`` retries it.
        """
        count = len(values)
        if count != self._num_fields:
            raise InvalidInputError(
                f"The number of values ({count}) does not match "
                f"the field count ({self._num_fields})."
            )

        self._buffer.extend(values)
        self._pending += 1
        self._total += 1

        if self._pending < self._batch_size:
            return False

        self._execute_pending()
        return True

    def queue_many(self, rows: Iterable[Sequence[Any]]) -> int:
        """
        Queue several row operations in order.

        Rows before an invalid row stay queued when InvalidInputError is raised.

        Returns:
            The number of batches executed while queuing
        """
        batches = 0
        for row in rows:
            if self.queue(*row):
                batches += 1
        return batches

    def flush(self) -> None:
        """
        Execute the pending operations, if any.

        Call this once after the last ``queue()``: operations still pending
        when the operator is discarded are never written.

        Raises:
            ExecutionError: If the statement fails. The operations stay
                pending so the flush can be retried.
        """
        if self._pending == 0:
            return

        operations = self._pending
        self._execute_pending()
        self._logger.info(
            "bulk.operator.flushed",
            operations=operations,
            affected_rows=self._affected_rows,
        )

    def reset(self) -> None:
        """
        Drop pending operations and zero every counter.

        The prepared full-batch statement and the configuration are kept.
        """
        discarded = self._pending
        self._buffer = []
        self._pending = 0
        self._total = 0
        self._affected_rows = 0
        self._logger.debug("bulk.operator.reset", discarded_operations=discarded)

    # --- Counters -----------------------------------------------------------------

    @property
    def total_queued(self) -> int:
        """Operations queued since construction or the last reset, flushed or not."""
        return self._total

    @property
    def flushed_count(self) -> int:
        """Operations already handed to the database."""
        return self._total - self._pending

    @property
    def pending_count(self) -> int:
        """Operations waiting in the buffer."""
        return self._pending

    @property
    def affected_rows(self) -> int:
        """
        Rows reported affected by every executed statement.

        For inserts this equals ``flushed_count``; deletes can report more
        rows than operations when key tuples are duplicated in the table.
        """
        return self._affected_rows

    @property
    def buffer(self) -> Tuple[Any, ...]:
        """The flattened pending values, ``num_fields`` per operation."""
        return tuple(self._buffer)

    def stats(self) -> OperatorStats:
        return OperatorStats(
            table=self._table,
            batch_size=self._batch_size,
            total_queued=self._total,
            pending_count=self._pending,
            affected_rows=self._affected_rows,
        )

    # --- Internals ----------------------------------------------------------------

    def _prepare(self, num_records: int) -> PreparedStatement:
        sql = self._builder.build(self._table, self._fields, num_records)
        return self._connection.prepare(sql)

    def _execute_pending(self) -> None:
        """Run the buffer; state is cleared only once the statement succeeds."""
        operations = self._pending
        try:
            if operations == self._batch_size:
                statement = self._statement
            else:
                statement = self._prepare(operations)
            affected = statement.execute(tuple(self._buffer))
        except Exception as e:
            self._logger.error(
                "bulk.operator.execute_failed",
                operations=operations,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ExecutionError(
                f"Failed to {self._builder.name} {operations} row(s) "
                f"in {self._table}: {e}",
                operations=operations,
                original_error=e,
            ) from e

        if affected is None or affected < 0:
            self._logger.debug(
                "bulk.operator.rowcount_unknown",
                operations=operations,
                rowcount=affected,
            )
            affected = 0

        self._affected_rows += affected
        self._buffer = []
        self._pending = 0

        self._logger.debug(
            "bulk.operator.batch_executed",
            operations=operations,
            affected_rows=affected,
        )

    # --- Context manager ----------------------------------------------------------

    def __enter__(self) -> "BulkOperator":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        if exc_type is None:
            self.flush()
        elif self._pending:
            self._logger.warning(
                "bulk.operator.pending_discarded",
                pending_operations=self._pending,
                error_type=exc_type.__name__,
            )
        return False

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(table={self._table}, "
            f"batch_size={self._batch_size}, total_queued={self._total}, "
            f"pending={self._pending}, affected_rows={self._affected_rows})"
        )


class BulkInserter(BulkOperator):
    """Inserts rows into a database table in bulk."""

    builder_class = InsertBuilder


class BulkDeleter(BulkOperator):
    """
    Deletes rows from a database table in bulk.

    Each queued operation is a key tuple; every row matching any queued
    tuple is deleted.
    """

    builder_class = DeleteBuilder
