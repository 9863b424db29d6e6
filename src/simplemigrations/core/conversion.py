"""Helpers for normalizing version scalars and description text."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from .exceptions import MigrationError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

ELLIPSIS = "..."


def _unconvertible(value: Any) -> MigrationError:
    return MigrationError(
        f"Unable to convert schema version {value!r} "
        f"({type(value).__name__}) to a 64-bit integer",
        value=value,
    )


def to_version(value: Any) -> int:
    """Convert a scalar returned by a database driver into a version number.

    Drivers hand back versions as ints, Decimals, floats or text depending on
    the column type and the driver. ``None`` means the version table has no
    rows yet.

    Args:
        value: Raw scalar from ``execute_scalar()``.

    Returns:
        The version as an int, or 0 if ``value`` is None.

    Raises:
        MigrationError: If the value is not an integer in the 64-bit range.
    """
    if value is None:
        return 0

    if isinstance(value, bool):
        version = int(value)
    elif isinstance(value, int):
        version = value
    elif isinstance(value, (float, Decimal)):
        try:
            integral = value == int(value)
        except (ValueError, OverflowError, InvalidOperation):
            raise _unconvertible(value) from None
        if not integral:
            raise _unconvertible(value)
        version = int(value)
    elif isinstance(value, (str, bytes, bytearray)):
        text = value if isinstance(value, str) else value.decode("ascii", "replace")
        try:
            version = int(text.strip(), 10)
        except ValueError:
            raise _unconvertible(value) from None
    else:
        raise _unconvertible(value)

    if not INT64_MIN <= version <= INT64_MAX:
        raise _unconvertible(value)
    return version


def truncate_description(description: str, max_length: int) -> str:
    """Shorten a description so it fits a column of ``max_length`` characters.

    Truncated text ends in an ellipsis, so a limit of 10 turns
    ``"Test Description"`` into ``"Test De..."``. A limit of 0 means
    unlimited.

    Args:
        description: Description of the applied migration.
        max_length: Column width, 0 for unlimited.

    Returns:
        The description, shortened if it did not fit.
    """
    if max_length <= 0 or len(description) <= max_length:
        return description
    if max_length <= len(ELLIPSIS):
        return description[:max_length]
    return description[: max_length - len(ELLIPSIS)] + ELLIPSIS
