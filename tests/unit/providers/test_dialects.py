"""Tests for the SQL supplied by each dialect provider."""

import pytest

from simplemigrations.core.config import ProviderConfig
from simplemigrations.providers import (
    MssqlDatabaseProvider,
    PostgresqlDatabaseProvider,
    SqliteDatabaseProvider,
    validate_table_name,
)

PROVIDERS = [SqliteDatabaseProvider, PostgresqlDatabaseProvider, MssqlDatabaseProvider]


@pytest.mark.parametrize("provider_cls", PROVIDERS)
class TestDialectSql:
    """Each dialect targets the configured table with named parameters."""

    def test_create_table_targets_table(self, provider_cls):
        sql = provider_cls(table_name="versions").get_create_version_table_sql()

        assert "CREATE TABLE" in sql
        assert "versions" in sql

    def test_current_version_selects_version_column(self, provider_cls):
        sql = provider_cls().get_current_version_sql()

        assert sql.startswith("SELECT")
        assert "Version FROM VersionInfo" in sql
        assert "ORDER BY Id DESC" in sql

    def test_set_version_uses_named_parameters_in_order(self, provider_cls):
        sql = provider_cls().get_set_version_sql()

        assert sql.index(":Version") < sql.index(":Description")

    def test_rejects_invalid_table_name(self, provider_cls):
        with pytest.raises(ValueError, match="table name"):
            provider_cls(table_name="VersionInfo; DROP TABLE users")

    def test_apply_config_validates_table_name(self, provider_cls):
        provider = provider_cls()

        with pytest.raises(ValueError, match="table name"):
            provider.apply_config(ProviderConfig(table_name="bad name"))


class TestDialectDefaults:
    """Dialect-specific defaults."""

    def test_postgresql_create_is_idempotent(self):
        sql = PostgresqlDatabaseProvider().get_create_version_table_sql()

        assert "IF NOT EXISTS" in sql
        assert "bigint" in sql

    def test_mssql_limits_description_to_column_width(self):
        provider = MssqlDatabaseProvider()

        assert provider.max_description_length == 256
        assert "NVARCHAR(256)" in provider.get_create_version_table_sql()

    def test_mssql_limit_can_be_overridden(self):
        assert MssqlDatabaseProvider(max_description_length=0).max_description_length == 0

    def test_mssql_from_config_keeps_column_limit(self):
        """A config without a limit leaves the column width in place."""
        assert MssqlDatabaseProvider.from_config(ProviderConfig()).max_description_length == 256

    def test_mssql_from_env_keeps_column_limit(self, monkeypatch):
        monkeypatch.delenv("SIMPLEMIGRATIONS_MAX_DESCRIPTION_LENGTH", raising=False)

        provider = MssqlDatabaseProvider.from_config(ProviderConfig.from_env())

        assert provider.max_description_length == 256

    def test_mssql_from_config_explicit_limit_wins(self):
        config = ProviderConfig(max_description_length=0)

        assert MssqlDatabaseProvider.from_config(config).max_description_length == 0

    def test_mssql_create_checks_object_id(self):
        sql = MssqlDatabaseProvider(table_name="dbo.VersionInfo").get_create_version_table_sql()

        assert "IF OBJECT_ID('dbo.VersionInfo', 'U') IS NULL" in sql


class TestValidateTableName:
    """Tests for validate_table_name()."""

    @pytest.mark.parametrize("name", ["VersionInfo", "_versions", "public.version_info"])
    def test_accepts_identifiers(self, name):
        assert validate_table_name(name) == name

    @pytest.mark.parametrize(
        "name", ["", "1versions", "a.b.c", "ver sions", "versions\n", "x;--"]
    )
    def test_rejects_non_identifiers(self, name):
        with pytest.raises(ValueError, match="Invalid version table name"):
            validate_table_name(name)
