"""simplemigrations - database-agnostic schema version tracking.

Example:
    import sqlite3

    from simplemigrations import DbApiConnection, SqliteDatabaseProvider

    provider = SqliteDatabaseProvider()
    provider.set_connection(DbApiConnection(sqlite3.connect("app.db"), paramstyle="named"))
    version = provider.ensure_created_and_get_current_version()
"""

from .core import MigrationError, ProviderConfig, SimpleMigrationsError
from .db import DbApiConnection, IsolationLevel, SqlAlchemyConnection
from .providers import (
    DatabaseProviderBase,
    MssqlDatabaseProvider,
    PostgresqlDatabaseProvider,
    SqliteDatabaseProvider,
    VersionTableProviderBase,
)

__version__ = "0.1.0"

__all__ = [
    "SimpleMigrationsError",
    "MigrationError",
    "ProviderConfig",
    "IsolationLevel",
    "DbApiConnection",
    "SqlAlchemyConnection",
    "DatabaseProviderBase",
    "VersionTableProviderBase",
    "SqliteDatabaseProvider",
    "PostgresqlDatabaseProvider",
    "MssqlDatabaseProvider",
]
