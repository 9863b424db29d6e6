"""Schema version providers.

Example:
    from simplemigrations.providers import SqliteDatabaseProvider

    provider = SqliteDatabaseProvider(use_transaction=True)
"""

from .base import DatabaseProviderBase, VersionTableProviderBase, validate_table_name
from .mssql import MssqlDatabaseProvider
from .postgresql import PostgresqlDatabaseProvider
from .sqlite import SqliteDatabaseProvider

__all__ = [
    "DatabaseProviderBase",
    "VersionTableProviderBase",
    "validate_table_name",
    "SqliteDatabaseProvider",
    "PostgresqlDatabaseProvider",
    "MssqlDatabaseProvider",
]
