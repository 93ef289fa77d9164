"""
MemoPad — Test Configuration (conftest.py)
===========================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── start_time:  First reading of every FakeClock
    ├── clock:       Controllable time source for MemoStore
    ├── store:       Empty MemoStore driven by `clock`
    ├── make_store:  Factory for stores with a custom clock step
    ├── server_info: Fixed address so tests never probe the network
    ├── app:         Fresh FastAPI app bound to `store`
    └── client:      HTTPX AsyncClient talking to `app` over ASGI
"""

import os

# Must be set before memopad.config builds its settings singleton
os.environ["HOST"] = "127.0.0.1"
os.environ["PORT"] = "8083"
os.environ["APP_ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from memopad.config import settings
from memopad.main import create_app
from memopad.schemas.memo import ServerInfo
from memopad.services.memo_store import MemoStore

START_TIME = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Returns START_TIME, then advances by `step` on every call."""

    def __init__(self, start: datetime = START_TIME, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def start_time():
    return START_TIME


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return MemoStore(clock=clock)


@pytest.fixture
def make_store():
    """Factory for stores whose clock moves by `step` per reading."""

    def _make(step: timedelta) -> MemoStore:
        return MemoStore(clock=FakeClock(step=step))

    return _make


@pytest.fixture
def server_info():
    return ServerInfo(
        host="127.0.0.1",
        port=8083,
        local_ip="127.0.0.1",
        public_ip=None,
        environment="test",
    )


@pytest.fixture
def app(store, server_info):
    return create_app(store=store, config=settings, server_info=server_info)


@pytest_asyncio.fixture
async def client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    raise_app_exceptions=False lets tests observe the 500 response produced
    by the catch-all handler instead of the re-raised exception.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
