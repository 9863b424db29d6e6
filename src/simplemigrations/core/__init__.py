"""Core types, configuration and errors for simplemigrations."""

from .config import ProviderConfig
from .conversion import to_version, truncate_description
from .exceptions import MigrationError, SimpleMigrationsError

__all__ = [
    "ProviderConfig",
    "SimpleMigrationsError",
    "MigrationError",
    "to_version",
    "truncate_description",
]
