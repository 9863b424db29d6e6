"""SQLite version table provider."""

from .base import VersionTableProviderBase


class SqliteDatabaseProvider(VersionTableProviderBase):
    """Version provider for SQLite.

    The SQL uses ``:name`` placeholders, which SQLAlchemy accepts and the
    sqlite3 driver binds from a mapping, so wrap sqlite3 connections with
    ``DbApiConnection(conn, paramstyle="named")``.
    """

    def get_create_version_table_sql(self) -> str:
        return f"""
            CREATE TABLE IF NOT EXISTS {self.table_name} (
                Id INTEGER PRIMARY KEY AUTOINCREMENT,
                Version INTEGER NOT NULL,
                AppliedOn DATETIME,
                Description TEXT NOT NULL
            )
        """

    def get_current_version_sql(self) -> str:
        return f"SELECT Version FROM {self.table_name} ORDER BY Id DESC LIMIT 1"

    def get_set_version_sql(self) -> str:
        return f"""
            INSERT INTO {self.table_name} (Version, AppliedOn, Description)
            VALUES (:Version, datetime('now', 'localtime'), :Description)
        """
