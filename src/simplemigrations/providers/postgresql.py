"""PostgreSQL version table provider."""

from .base import VersionTableProviderBase


class PostgresqlDatabaseProvider(VersionTableProviderBase):
    """Version provider for PostgreSQL, used through SQLAlchemy."""

    def get_create_version_table_sql(self) -> str:
        return f"""
            CREATE TABLE IF NOT EXISTS {self.table_name} (
                Id SERIAL PRIMARY KEY,
                Version bigint NOT NULL,
                AppliedOn timestamp with time zone,
                Description text NOT NULL
            )
        """

    def get_current_version_sql(self) -> str:
        return f"SELECT Version FROM {self.table_name} ORDER BY Id DESC LIMIT 1"

    def get_set_version_sql(self) -> str:
        return f"""
            INSERT INTO {self.table_name} (Version, AppliedOn, Description)
            VALUES (:Version, CURRENT_TIMESTAMP, :Description)
        """
