"""Database capability set and driver adapters."""

from .alchemy import (
    SqlAlchemyCommand,
    SqlAlchemyConnection,
    SqlAlchemyParameter,
    SqlAlchemyTransaction,
)
from .dbapi import DbApiCommand, DbApiConnection, DbApiParameter, DbApiTransaction
from .protocols import (
    CommandProtocol,
    ConnectionProtocol,
    IsolationLevel,
    ParameterProtocol,
    TransactionProtocol,
)

__all__ = [
    "IsolationLevel",
    "ConnectionProtocol",
    "CommandProtocol",
    "TransactionProtocol",
    "ParameterProtocol",
    "DbApiConnection",
    "DbApiCommand",
    "DbApiTransaction",
    "DbApiParameter",
    "SqlAlchemyConnection",
    "SqlAlchemyCommand",
    "SqlAlchemyTransaction",
    "SqlAlchemyParameter",
]
