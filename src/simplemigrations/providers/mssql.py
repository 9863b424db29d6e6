"""SQL Server version table provider."""

from .base import VersionTableProviderBase


class MssqlDatabaseProvider(VersionTableProviderBase):
    """Version provider for SQL Server, used through SQLAlchemy.

    Descriptions are stored in an NVARCHAR(256) column, so they are
    truncated to 256 characters by default.
    """

    default_max_description_length = 256

    def get_create_version_table_sql(self) -> str:
        return f"""
            IF OBJECT_ID('{self.table_name}', 'U') IS NULL
            CREATE TABLE {self.table_name} (
                Id INT IDENTITY(1,1) PRIMARY KEY NOT NULL,
                Version BIGINT NOT NULL,
                AppliedOn DATETIME,
                Description NVARCHAR(256) NOT NULL
            )
        """

    def get_current_version_sql(self) -> str:
        return f"SELECT TOP 1 Version FROM {self.table_name} ORDER BY Id DESC"

    def get_set_version_sql(self) -> str:
        return f"""
            INSERT INTO {self.table_name} (Version, AppliedOn, Description)
            VALUES (:Version, GETDATE(), :Description)
        """
