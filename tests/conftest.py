"""Shared test fixtures."""

from datetime import UTC, datetime

import pytest

from config_store import ConfigManager, RequestContext
from config_store._internal.clock import TickingClock
from config_store.stores import InMemoryStore, SQLiteStore


def make_clock():
    return TickingClock(datetime(2024, 1, 1, tzinfo=UTC))


@pytest.fixture(params=["memory", "sqlite"])
async def store(request):
    if request.param == "memory":
        backend = InMemoryStore(clock=make_clock())
    else:
        backend = SQLiteStore(":memory:", clock=make_clock())
    yield backend
    await backend.close()


@pytest.fixture
def manager(store):
    return ConfigManager(store=store)


@pytest.fixture
def alice_ctx():
    return RequestContext(creator="  Alice@Acme.com ")


@pytest.fixture
def bob_ctx():
    return RequestContext(creator="bob@acme.com")


@pytest.fixture
def shared_ctx():
    return RequestContext(creator="")
