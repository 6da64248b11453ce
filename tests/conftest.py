# pylint: disable=redefined-outer-name
import json

import pytest

from ml_expr.adapters.plugin_client import AbstractPluginTransport


class FakePluginTransport(AbstractPluginTransport):
    """Records every call and answers with a canned response body."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else {"status": "success", "data": {}}
        self.error = error
        self.calls = []

    def send(self, path: str, body: bytes) -> bytes:
        self.calls.append((path, body))
        if self.error is not None:
            raise self.error
        if isinstance(self.response, bytes):
            return self.response
        return json.dumps(self.response).encode("utf-8")

    def sent_attributes(self, index=-1):
        """Return data.attributes of a recorded request body."""
        _, body = self.calls[index]
        return json.loads(body)["data"]["attributes"]


@pytest.fixture
def fake_transport():
    return FakePluginTransport()


@pytest.fixture
def sqlite_session_factory():
    """Create SQLite in-memory database for fast testing."""
    from sqlalchemy import create_engine
    from sqlalchemy.orm import sessionmaker, clear_mappers
    from sqlalchemy.pool import StaticPool
    from datasources.adapters import orm

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    orm.metadata.create_all(engine)
    orm.start_mappers()

    yield sessionmaker(bind=engine, expire_on_commit=False)

    clear_mappers()
    engine.dispose()


@pytest.fixture
def make_fake_transport():
    """Factory for fake transports with a custom response or error."""
    return FakePluginTransport
