"""Adapter exposing a PEP 249 (DB-API 2.0) connection as a ConnectionProtocol.

DB-API has no explicit BEGIN: drivers open a transaction implicitly and end
it on ``commit()`` or ``rollback()``. A ``DbApiTransaction`` therefore marks
the driver's implicit transaction rather than starting one, and commands run
without a transaction are committed immediately.

Example:
    import sqlite3

    connection = DbApiConnection(sqlite3.connect("app.db"), paramstyle="named")
    provider.set_connection(connection)
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Any

from loguru import logger

from .protocols import IsolationLevel

# Styles that bind parameters by name; the rest bind by position.
NAMED_PARAMSTYLES = frozenset({"named", "pyformat"})
POSITIONAL_PARAMSTYLES = frozenset({"qmark", "format", "numeric"})

_NAMED_PLACEHOLDER = re.compile(r"(?<![:\w]):[A-Za-z_]\w*")


def _detect_paramstyle(connection: Any) -> str:
    """Look up ``paramstyle`` on the driver module that owns ``connection``."""
    root = type(connection).__module__.split(".")[0]
    module = sys.modules.get(root)
    return getattr(module, "paramstyle", "qmark")


@dataclass
class DbApiParameter:
    """A named value bound to a DB-API command."""

    name: str = ""
    value: Any = None


class DbApiTransaction:
    """The driver's implicit transaction, scoped to one operation."""

    def __init__(self, connection: Any, isolation_level: IsolationLevel):
        self._connection = connection
        self.isolation_level = isolation_level
        self._completed = False

    @property
    def completed(self) -> bool:
        """True once the transaction was committed, rolled back or closed."""
        return self._completed

    def commit(self) -> None:
        """Commit the connection's pending work."""
        self._connection.commit()
        self._completed = True

    def rollback(self) -> None:
        """Discard the connection's pending work."""
        self._connection.rollback()
        self._completed = True

    def close(self) -> None:
        """Roll back if neither committed nor rolled back."""
        if not self._completed:
            self.rollback()


class DbApiCommand:
    """A SQL statement executed through a DB-API cursor."""

    def __init__(self, connection: "DbApiConnection"):
        self._owner = connection
        self._cursor: Any = None
        self.text = ""
        self.transaction: DbApiTransaction | None = None
        self.parameters: list[DbApiParameter] = []

    def create_parameter(self) -> DbApiParameter:
        """Create an unbound parameter."""
        return DbApiParameter()

    def bound_parameters(self) -> dict[str, Any] | tuple[Any, ...]:
        """Parameters in the shape the driver's paramstyle expects.

        Named styles get a mapping; positional styles get a tuple in the
        order the parameters were added.

        Raises:
            ValueError: If the SQL uses ``:name`` placeholders but the
                connection binds by position.
        """
        if self._owner.paramstyle in NAMED_PARAMSTYLES:
            return {p.name: p.value for p in self.parameters}
        if self.parameters and _NAMED_PLACEHOLDER.search(self.text):
            raise ValueError(
                f"SQL uses named placeholders but the connection paramstyle is "
                f"{self._owner.paramstyle!r}; wrap it with paramstyle=\"named\""
            )
        return tuple(p.value for p in self.parameters)

    def _execute(self) -> Any:
        if self._cursor is None:
            self._cursor = self._owner.raw_connection.cursor()
        self._cursor.execute(self.text, self.bound_parameters())
        return self._cursor

    def _autocommit(self) -> None:
        if self.transaction is None:
            self._owner.raw_connection.commit()

    def execute_non_query(self) -> int:
        """Execute the statement and return the affected row count."""
        cursor = self._execute()
        self._autocommit()
        return cursor.rowcount

    def execute_scalar(self) -> Any:
        """Execute the statement and return the first column of the first row."""
        cursor = self._execute()
        row = cursor.fetchone()
        self._autocommit()
        if row is None:
            return None
        return row[0]

    def close(self) -> None:
        """Close the cursor if one was opened."""
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None


class DbApiConnection:
    """ConnectionProtocol implementation over a PEP 249 connection."""

    def __init__(self, connection: Any, paramstyle: str | None = None):
        """Wrap a DB-API connection.

        Args:
            connection: An open PEP 249 connection.
            paramstyle: Placeholder style of the SQL that will run on this
                connection. Defaults to the driver module's ``paramstyle``.

        Raises:
            ValueError: If ``paramstyle`` is not a PEP 249 style.
        """
        if connection is None:
            raise ValueError("connection must not be None")
        self.raw_connection = connection
        self.paramstyle = paramstyle or _detect_paramstyle(connection)
        if self.paramstyle not in NAMED_PARAMSTYLES | POSITIONAL_PARAMSTYLES:
            raise ValueError(f"Unsupported paramstyle: {self.paramstyle!r}")

    def create_command(self) -> DbApiCommand:
        """Create a command bound to this connection."""
        return DbApiCommand(self)

    def begin_transaction(self, isolation_level: IsolationLevel) -> DbApiTransaction:
        """Mark the start of the driver's implicit transaction.

        DB-API has no portable way to set isolation, so the driver's own
        setting stays in effect.
        """
        logger.debug(
            f"Beginning DB-API transaction (requested {isolation_level.value}, "
            f"driver isolation unchanged)"
        )
        return DbApiTransaction(self.raw_connection, isolation_level)

    def close(self) -> None:
        """Close the underlying connection."""
        self.raw_connection.close()
