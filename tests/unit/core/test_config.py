"""Tests for ProviderConfig."""

import pytest

from simplemigrations.core.config import ProviderConfig


class TestProviderConfig:
    """Tests for ProviderConfig defaults and environment loading."""

    def test_defaults(self):
        config = ProviderConfig()

        assert config.use_transaction is True
        assert config.max_description_length is None
        assert config.table_name == "VersionInfo"

    def test_from_env_without_variables(self, monkeypatch):
        for name in (
            "SIMPLEMIGRATIONS_USE_TRANSACTION",
            "SIMPLEMIGRATIONS_MAX_DESCRIPTION_LENGTH",
            "SIMPLEMIGRATIONS_TABLE_NAME",
        ):
            monkeypatch.delenv(name, raising=False)

        assert ProviderConfig.from_env() == ProviderConfig()

    @pytest.mark.parametrize(
        "raw, expected",
        [("1", True), ("true", True), ("YES", True), ("on", True),
         ("0", False), ("false", False), ("No", False), ("off", False)],
    )
    def test_from_env_parses_use_transaction(self, monkeypatch, raw, expected):
        monkeypatch.setenv("SIMPLEMIGRATIONS_USE_TRANSACTION", raw)

        assert ProviderConfig.from_env().use_transaction is expected

    def test_from_env_rejects_bad_boolean(self, monkeypatch):
        monkeypatch.setenv("SIMPLEMIGRATIONS_USE_TRANSACTION", "maybe")

        with pytest.raises(ValueError, match="SIMPLEMIGRATIONS_USE_TRANSACTION"):
            ProviderConfig.from_env()

    def test_from_env_parses_max_description_length(self, monkeypatch):
        monkeypatch.setenv("SIMPLEMIGRATIONS_MAX_DESCRIPTION_LENGTH", "256")

        assert ProviderConfig.from_env().max_description_length == 256

    @pytest.mark.parametrize("raw", ["abc", "-1", "2.5"])
    def test_from_env_rejects_bad_length(self, monkeypatch, raw):
        monkeypatch.setenv("SIMPLEMIGRATIONS_MAX_DESCRIPTION_LENGTH", raw)

        with pytest.raises(ValueError, match="SIMPLEMIGRATIONS_MAX_DESCRIPTION_LENGTH"):
            ProviderConfig.from_env()

    def test_from_env_reads_table_name(self, monkeypatch):
        monkeypatch.setenv("SIMPLEMIGRATIONS_TABLE_NAME", "schema_versions")

        assert ProviderConfig.from_env().table_name == "schema_versions"
