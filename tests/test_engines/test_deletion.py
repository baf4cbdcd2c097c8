"""Tests for DeletionEngine."""

import pytest

from config_store.engines import DeletionEngine, UpsertEngine
from config_store.exceptions import ValidationError


@pytest.fixture
def engine(store):
    return DeletionEngine(store)


@pytest.fixture
async def seeded(store):
    writer = UpsertEngine(store)
    await writer.upsert("theme", "alice", "dark")
    await writer.upsert("limits", "alice", {"max": 5})
    await writer.upsert("theme", "bob", "light")
    await writer.upsert("theme", "", "shared")
    return store


async def test_unset_single_key(engine, seeded):
    assert await engine.unset(" Theme ", "ALICE") == 1

    assert await seeded.get("THEME", "alice") is None
    assert await seeded.get("LIMITS", "alice") is not None
    assert await seeded.get("THEME", "bob") is not None


async def test_unset_missing_key(engine, seeded):
    assert await engine.unset("nothing", "alice") == 0


async def test_unset_owner_wide(engine, seeded):
    assert await engine.unset(None, "alice") == 2

    assert await seeded.count("", "alice") == 0
    assert await seeded.count("", "bob") == 1
    assert await seeded.count("", "") == 1


async def test_empty_owner_only_reaches_unscoped_records(engine, seeded):
    assert await engine.unset(None, "") == 1
    assert await seeded.count("", None) == 3


async def test_unset_short_key(engine, seeded):
    with pytest.raises(ValidationError):
        await engine.unset("ab", "alice")
