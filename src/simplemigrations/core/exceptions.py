"""Custom exceptions for simplemigrations."""

from typing import Any


class SimpleMigrationsError(Exception):
    """Base exception for all simplemigrations errors."""

    pass


class MigrationError(SimpleMigrationsError):
    """The database holds a schema version that cannot be read as an integer."""

    def __init__(self, message: str, value: Any = None):
        """Initialize exception with the offending value.

        Args:
            message: Human-readable description of the failure.
            value: Raw scalar returned by the driver.
        """
        self.value = value
        super().__init__(message)
