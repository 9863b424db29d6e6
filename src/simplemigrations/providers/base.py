"""Database-agnostic schema version provider.

A provider owns the version table of one database. Subclasses supply the
dialect's SQL; this class runs it against an attached connection:

    provider = SqliteDatabaseProvider()
    provider.set_connection(DbApiConnection(sqlite3.connect("app.db"), paramstyle="named"))
    provider.ensure_created()
    current = provider.get_current_version()
    ...  # apply migrations newer than ``current``
    provider.update_version(current, 4, "Add tags table")
"""

from __future__ import annotations

import operator
import re
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from loguru import logger

from ..core.config import ProviderConfig
from ..core.conversion import to_version, truncate_description
from ..db.protocols import IsolationLevel

if TYPE_CHECKING:
    from ..db.protocols import CommandProtocol, ConnectionProtocol, TransactionProtocol


class DatabaseProviderBase(ABC):
    """Reads and records the schema version stored in the target database.

    Each operation runs one SQL statement. When ``use_transaction`` is set
    the statement runs in its own SERIALIZABLE transaction, committed before
    the operation returns. Driver errors propagate unmodified.

    Attributes:
        use_transaction: Wrap every statement in a transaction.
        version_parameter_name: Name of the new-version parameter.
        description_parameter_name: Name of the description parameter.
    """

    version_parameter_name = "Version"
    description_parameter_name = "Description"

    def __init__(
        self,
        use_transaction: bool = True,
        max_description_length: int = 0,
    ):
        """Initialize the provider without a connection.

        Args:
            use_transaction: Wrap every statement in a transaction.
            max_description_length: Width of the description column,
                0 for unlimited.
        """
        self._connection: ConnectionProtocol | None = None
        self.use_transaction = use_transaction
        self.max_description_length = max_description_length

    @classmethod
    def from_config(cls, config: ProviderConfig, **kwargs) -> "DatabaseProviderBase":
        """Create a provider configured from a ProviderConfig."""
        provider = cls(**kwargs)
        provider.apply_config(config)
        return provider

    def apply_config(self, config: ProviderConfig) -> None:
        """Apply the transaction and description settings of ``config``.

        A ``max_description_length`` of None leaves the provider's limit as is.
        """
        self.use_transaction = config.use_transaction
        if config.max_description_length is not None:
            self.max_description_length = config.max_description_length

    @property
    def max_description_length(self) -> int:
        """Maximum description length persisted, 0 for unlimited."""
        return self._max_description_length

    @max_description_length.setter
    def max_description_length(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"max_description_length must not be negative, got {value}")
        self._max_description_length = value

    @property
    def connection(self) -> "ConnectionProtocol | None":
        """The attached connection, or None before set_connection()."""
        return self._connection

    # =========================================================================
    # SQL supplied by the dialect
    # =========================================================================

    @abstractmethod
    def get_create_version_table_sql(self) -> str:
        """SQL creating the version table. Must be safe to run repeatedly."""
        pass

    @abstractmethod
    def get_current_version_sql(self) -> str:
        """SQL selecting the current version as a single scalar."""
        pass

    @abstractmethod
    def get_set_version_sql(self) -> str:
        """SQL recording a version.

        Receives two parameters, in order: the new version, named
        ``version_parameter_name``, and the description, named
        ``description_parameter_name``.
        """
        pass

    # =========================================================================
    # Operations
    # =========================================================================

    def set_connection(self, connection: "ConnectionProtocol") -> None:
        """Attach the connection used by all later operations.

        Args:
            connection: Connection to the database being migrated. Replaces
                any previously attached connection.

        Raises:
            ValueError: If connection is None.
        """
        if connection is None:
            raise ValueError("connection must not be None")
        self._connection = connection

    def ensure_created(self) -> None:
        """Create the version table if it does not exist.

        Raises:
            RuntimeError: If no connection is attached.
        """
        connection = self._require_connection()

        with self._transaction(connection) as transaction:
            with self._command(connection, transaction) as command:
                command.text = self.get_create_version_table_sql()
                logger.debug(f"Ensuring version table exists ({self._mode(transaction)})")
                command.execute_non_query()

    def get_current_version(self) -> int:
        """Read the current schema version.

        Returns:
            The current version, or 0 if no version has been recorded.

        Raises:
            RuntimeError: If no connection is attached.
            MigrationError: If the stored value is not an integer.
        """
        connection = self._require_connection()

        with self._transaction(connection) as transaction:
            with self._command(connection, transaction) as command:
                command.text = self.get_current_version_sql()
                logger.debug(f"Reading current schema version ({self._mode(transaction)})")
                result = command.execute_scalar()

        version = to_version(result)
        logger.debug(f"Current schema version is {version}")
        return version

    def update_version(self, old_version: int, new_version: int, new_description: str) -> None:
        """Record ``new_version`` as the current schema version.

        Args:
            old_version: Version being migrated from. Logged only.
            new_version: Version being migrated to.
            new_description: Description of the migration. Truncated to
                ``max_description_length`` when that is positive.

        Raises:
            RuntimeError: If no connection is attached.
            TypeError: If new_version is not an integer.
        """
        connection = self._require_connection()
        version = operator.index(new_version)

        description = truncate_description(new_description, self.max_description_length)
        if description != new_description:
            logger.warning(
                f"Description of version {new_version} truncated to "
                f"{self.max_description_length} characters"
            )

        with self._transaction(connection) as transaction:
            with self._command(connection, transaction) as command:
                command.text = self.get_set_version_sql()

                # Positional paramstyles rely on version-then-description.
                version_param = command.create_parameter()
                version_param.name = self.version_parameter_name
                version_param.value = version
                command.parameters.append(version_param)

                description_param = command.create_parameter()
                description_param.name = self.description_parameter_name
                description_param.value = description
                command.parameters.append(description_param)

                command.execute_non_query()

        logger.info(f"Schema version updated from {old_version} to {new_version}: {description}")

    def ensure_created_and_get_current_version(self) -> int:
        """Create the version table if needed, then read the current version."""
        self.ensure_created()
        return self.get_current_version()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _require_connection(self) -> "ConnectionProtocol":
        if self._connection is None:
            raise RuntimeError("Connection not set; call set_connection() first")
        return self._connection

    @staticmethod
    def _mode(transaction: "TransactionProtocol | None") -> str:
        return "in transaction" if transaction is not None else "without transaction"

    @contextmanager
    def _transaction(
        self, connection: "ConnectionProtocol"
    ) -> Iterator["TransactionProtocol | None"]:
        """Yield a SERIALIZABLE transaction, or None when transactions are off.

        The transaction is committed if the block completes and closed on
        every exit path, so a failed block leaves it uncommitted.
        """
        if not self.use_transaction:
            yield None
            return

        transaction = connection.begin_transaction(IsolationLevel.SERIALIZABLE)
        try:
            yield transaction
            transaction.commit()
        finally:
            transaction.close()

    @contextmanager
    def _command(
        self,
        connection: "ConnectionProtocol",
        transaction: "TransactionProtocol | None",
    ) -> Iterator["CommandProtocol"]:
        command = connection.create_command()
        try:
            if transaction is not None:
                command.transaction = transaction
            yield command
        finally:
            command.close()


_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?")


def validate_table_name(table_name: str) -> str:
    """Check that ``table_name`` is a plain, optionally schema-qualified, identifier.

    The name is interpolated into SQL text, so anything else is rejected.

    Raises:
        ValueError: If the name is not a valid identifier.
    """
    if not table_name or not _IDENTIFIER.fullmatch(table_name):
        raise ValueError(f"Invalid version table name: {table_name!r}")
    return table_name


class VersionTableProviderBase(DatabaseProviderBase):
    """Provider whose SQL targets a configurable version table.

    The table keeps one row per recorded version; the newest row holds the
    current version.
    """

    default_max_description_length = 0

    def __init__(
        self,
        table_name: str = "VersionInfo",
        use_transaction: bool = True,
        max_description_length: int | None = None,
    ):
        if max_description_length is None:
            max_description_length = self.default_max_description_length
        super().__init__(use_transaction, max_description_length)
        self.table_name = validate_table_name(table_name)

    def apply_config(self, config: ProviderConfig) -> None:
        """Apply ``config``, including its version table name."""
        super().apply_config(config)
        self.table_name = validate_table_name(config.table_name)
