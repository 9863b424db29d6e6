"""Adapter exposing a SQLAlchemy Connection as a ConnectionProtocol.

SQL text runs through ``text()`` with named ``:param`` placeholders, so the
same statement works on every dialect SQLAlchemy supports.

Example:
    from sqlalchemy import create_engine

    engine = create_engine("postgresql+psycopg://localhost/app")
    with engine.connect() as conn:
        provider.set_connection(SqlAlchemyConnection(conn))
        provider.ensure_created()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from loguru import logger
from sqlalchemy import bindparam
from sqlalchemy import text as sql_text

from .protocols import IsolationLevel

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, CursorResult, RootTransaction
    from sqlalchemy.sql.elements import TextClause


@dataclass
class SqlAlchemyParameter:
    """A named value bound to a ``text()`` statement."""

    name: str = ""
    value: Any = None


class SqlAlchemyTransaction:
    """Wraps the transaction returned by ``Connection.begin()``.

    Closing it puts the connection back at the isolation level it had before
    the transaction began.
    """

    def __init__(
        self,
        transaction: "RootTransaction",
        isolation_level: IsolationLevel,
        connection: "Connection | None" = None,
        restore_isolation_level: str | None = None,
    ):
        self._transaction = transaction
        self.isolation_level = isolation_level
        self._connection = connection
        self._restore_isolation_level = restore_isolation_level

    @property
    def is_active(self) -> bool:
        """True until the transaction is committed, rolled back or closed."""
        return self._transaction.is_active

    def commit(self) -> None:
        """Commit the transaction."""
        self._transaction.commit()

    def rollback(self) -> None:
        """Roll back the transaction."""
        self._transaction.rollback()

    def close(self) -> None:
        """Close the transaction and restore the previous isolation level.

        SQLAlchemy rolls back the transaction if it is still active.
        """
        try:
            self._transaction.close()
        finally:
            if self._connection is not None and self._restore_isolation_level is not None:
                self._connection.execution_options(
                    isolation_level=self._restore_isolation_level
                )
                self._restore_isolation_level = None


class SqlAlchemyCommand:
    """A ``text()`` statement executed on a SQLAlchemy Connection."""

    def __init__(self, connection: "Connection"):
        self._connection = connection
        self._result: CursorResult | None = None
        self.text = ""
        self.transaction: SqlAlchemyTransaction | None = None
        self.parameters: list[SqlAlchemyParameter] = []

    def create_parameter(self) -> SqlAlchemyParameter:
        """Create an unbound parameter."""
        return SqlAlchemyParameter()

    def statement(self) -> "TextClause":
        """Build the ``text()`` construct, binding parameters in order."""
        return sql_text(self.text).bindparams(
            *[bindparam(p.name, p.value) for p in self.parameters]
        )

    def _execute(self) -> tuple["CursorResult", bool]:
        # Only commit what SQLAlchemy auto-begins for this statement.
        autobegun = self.transaction is None and not self._connection.in_transaction()
        self._result = self._connection.execute(self.statement())
        return self._result, autobegun

    def execute_non_query(self) -> int:
        """Execute the statement and return the affected row count."""
        result, autobegun = self._execute()
        rowcount = result.rowcount
        if autobegun:
            self._connection.commit()
        return rowcount

    def execute_scalar(self) -> Any:
        """Execute the statement and return the first column of the first row."""
        result, autobegun = self._execute()
        value = result.scalar()
        if autobegun:
            self._connection.commit()
        return value

    def close(self) -> None:
        """Close the cursor result if one is open."""
        if self._result is not None:
            self._result.close()
            self._result = None


class SqlAlchemyConnection:
    """ConnectionProtocol implementation over a SQLAlchemy 2.x Connection."""

    def __init__(self, connection: "Connection"):
        """Wrap a SQLAlchemy connection.

        Args:
            connection: An open connection that is not inside a transaction
                when the provider begins one.

        Raises:
            ValueError: If ``connection`` is None.
        """
        if connection is None:
            raise ValueError("connection must not be None")
        self.raw_connection = connection

    @property
    def dialect_name(self) -> str:
        """Name of the SQLAlchemy dialect, e.g. ``sqlite`` or ``postgresql``."""
        return self.raw_connection.dialect.name

    def create_command(self) -> SqlAlchemyCommand:
        """Create a command bound to this connection."""
        return SqlAlchemyCommand(self.raw_connection)

    def begin_transaction(self, isolation_level: IsolationLevel) -> SqlAlchemyTransaction:
        """Set the isolation level and begin a transaction.

        The connection's previous level, or the dialect default when none was
        set, is restored when the transaction is closed.
        """
        conn = self.raw_connection
        previous = conn.get_execution_options().get("isolation_level")
        restore = previous or conn.default_isolation_level

        logger.debug(f"Beginning {self.dialect_name} transaction at {isolation_level.value}")
        conn.execution_options(isolation_level=isolation_level.value)
        try:
            transaction = conn.begin()
        except Exception:
            if restore is not None:
                conn.execution_options(isolation_level=restore)
            raise
        return SqlAlchemyTransaction(transaction, isolation_level, conn, restore)

    def close(self) -> None:
        """Close the underlying connection."""
        self.raw_connection.close()
