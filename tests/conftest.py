"""Pytest configuration and fixtures."""

import sqlite3

import pytest
from sqlalchemy import create_engine

from simplemigrations.db import DbApiConnection, SqlAlchemyConnection
from tests.fakes import RecordingConnection, StubVersionProvider


@pytest.fixture
def provider() -> StubVersionProvider:
    """Provide a provider with no connection attached."""
    return StubVersionProvider()


@pytest.fixture
def connection() -> RecordingConnection:
    """Provide a recording connection fake."""
    return RecordingConnection()


@pytest.fixture
def sqlite_conn():
    """Provide an in-memory sqlite3 connection."""
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def dbapi_connection(sqlite_conn) -> DbApiConnection:
    """Provide a DB-API adapter over in-memory SQLite with named parameters."""
    return DbApiConnection(sqlite_conn, paramstyle="named")


@pytest.fixture
def engine(tmp_path):
    """Provide a SQLAlchemy engine for a temporary SQLite file."""
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}")
    yield engine
    engine.dispose()


@pytest.fixture
def alchemy_connection(engine):
    """Provide a SQLAlchemy adapter over a connected engine."""
    with engine.connect() as conn:
        yield SqlAlchemyConnection(conn)
