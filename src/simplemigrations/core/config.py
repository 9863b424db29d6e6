"""Configuration management for simplemigrations."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _parse_non_negative_int(name: str, raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


@dataclass
class ProviderConfig:
    """Version provider configuration."""

    use_transaction: bool = True
    max_description_length: int | None = None  # None: provider default, 0: unlimited
    table_name: str = "VersionInfo"

    @classmethod
    def from_env(cls) -> "ProviderConfig":
        """Load configuration from environment variables."""
        config = cls()

        if raw := os.environ.get("SIMPLEMIGRATIONS_USE_TRANSACTION"):
            config.use_transaction = _parse_bool(
                "SIMPLEMIGRATIONS_USE_TRANSACTION", raw
            )

        if raw := os.environ.get("SIMPLEMIGRATIONS_MAX_DESCRIPTION_LENGTH"):
            config.max_description_length = _parse_non_negative_int(
                "SIMPLEMIGRATIONS_MAX_DESCRIPTION_LENGTH", raw
            )

        if table_name := os.environ.get("SIMPLEMIGRATIONS_TABLE_NAME"):
            config.table_name = table_name

        return config
