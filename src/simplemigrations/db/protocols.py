"""Protocol definitions for the database capability set.

The version provider never talks to a driver directly. It depends on the
small set of capabilities below, so any driver can be plugged in through an
adapter:

- Connection: create commands, begin transactions
- Command: SQL text, optional transaction, ordered parameters, execution
- Transaction: commit, rollback, close
- Parameter: a named value bound to a command

Adapters for PEP 249 drivers and SQLAlchemy live in ``dbapi`` and
``alchemy``. Tests use in-memory fakes implementing the same protocols.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, runtime_checkable


class IsolationLevel(Enum):
    """Transaction isolation level, valued by its SQL spelling."""

    READ_UNCOMMITTED = "READ UNCOMMITTED"
    READ_COMMITTED = "READ COMMITTED"
    REPEATABLE_READ = "REPEATABLE READ"
    SERIALIZABLE = "SERIALIZABLE"


@runtime_checkable
class ParameterProtocol(Protocol):
    """A named value bound to a command."""

    name: str
    value: Any


@runtime_checkable
class TransactionProtocol(Protocol):
    """A transaction scoped to a single provider operation."""

    def commit(self) -> None:
        """Commit the transaction."""
        ...

    def rollback(self) -> None:
        """Roll back the transaction."""
        ...

    def close(self) -> None:
        """Release the transaction, discarding it if it was not committed."""
        ...


@runtime_checkable
class CommandProtocol(Protocol):
    """A single SQL statement prepared against a connection."""

    text: str
    transaction: TransactionProtocol | None
    parameters: list[ParameterProtocol]

    def create_parameter(self) -> ParameterProtocol:
        """Create an unbound parameter. It is not added to ``parameters``."""
        ...

    def execute_non_query(self) -> int:
        """Execute the statement and return the affected row count."""
        ...

    def execute_scalar(self) -> Any:
        """Execute the statement and return the first column of the first row."""
        ...

    def close(self) -> None:
        """Release driver resources held by the command."""
        ...


@runtime_checkable
class ConnectionProtocol(Protocol):
    """An open database connection."""

    def create_command(self) -> CommandProtocol:
        """Create a command bound to this connection."""
        ...

    def begin_transaction(self, isolation_level: IsolationLevel) -> TransactionProtocol:
        """Begin a transaction at the given isolation level."""
        ...

    def close(self) -> None:
        """Close the underlying connection."""
        ...
