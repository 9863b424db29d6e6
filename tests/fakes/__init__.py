"""Test fakes for testing without a real database.

Example:
    from tests.fakes import RecordingConnection

    connection = RecordingConnection(scalar=4)
    provider.set_connection(connection)
    assert provider.get_current_version() == 4
    assert connection.last_transaction.committed
"""

from .db import (
    RecordingCommand,
    RecordingConnection,
    RecordingParameter,
    RecordingTransaction,
    StubVersionProvider,
)

__all__ = [
    "RecordingCommand",
    "RecordingConnection",
    "RecordingParameter",
    "RecordingTransaction",
    "StubVersionProvider",
]
