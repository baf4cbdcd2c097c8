"""Tests for RetrievalEngine."""

import pytest

from config_store.engines import SORT_OPTIONS, RetrievalEngine, UpsertEngine, parse_sort
from config_store.exceptions import NotFoundError, ValidationError


@pytest.fixture
def engine(store):
    return RetrievalEngine(store)


@pytest.fixture
def writer(store):
    return UpsertEngine(store)


# ── get ──────────────────────────────────────────────────────


async def test_get_decodes_value(engine, writer):
    await writer.upsert("limits", "alice", {"a": 1})
    record = await engine.get(" Limits ", "ALICE")

    assert record.key == "LIMITS"
    assert record.value == {"a": 1}
    assert record.created_by == "alice"


async def test_get_plain_string(engine, writer):
    await writer.upsert("theme", "alice", "dark")
    assert (await engine.get("theme", "alice")).value == "dark"


async def test_get_missing_raises(engine):
    with pytest.raises(NotFoundError) as exc_info:
        await engine.get("theme", "alice")
    assert exc_info.value.key == "THEME"


async def test_get_is_owner_scoped(engine, writer):
    await writer.upsert("theme", "bob", "dark")
    with pytest.raises(NotFoundError):
        await engine.get("theme", "alice")


async def test_get_without_owner_sees_every_owner(engine, writer):
    await writer.upsert("theme", "bob", "dark")
    assert (await engine.get("theme", "")).value == "dark"


async def test_get_short_key(engine):
    with pytest.raises(ValidationError):
        await engine.get("ab", "alice")


# ── multiplex ────────────────────────────────────────────────


async def test_multiplex_reports_existence(engine, writer):
    await writer.upsert("theme", "alice", {"mode": "dark"})

    data = await engine.multiplex(["theme", "missing"], "alice")

    assert data["THEME"]["exists"] is True
    assert data["THEME"]["value"] == {"mode": "dark"}
    assert data["THEME"]["createdBy"] == "alice"
    assert data["THEME"]["createdAt"] is not None
    assert data["MISSING"] == {"exists": False, "key": "MISSING", "value": None}


async def test_multiplex_normalizes_short_keys(engine):
    data = await engine.multiplex(["A", "b", " c "], "alice")

    assert set(data) == {"A", "B", "C"}
    assert all(entry["exists"] is False for entry in data.values())


async def test_multiplex_collapses_duplicates(engine, writer):
    await writer.upsert("theme", "alice", "dark")
    data = await engine.multiplex(["theme", " THEME", "other", "Theme "], "alice")

    assert list(data) == ["THEME", "OTHER"]


async def test_multiplex_is_owner_scoped(engine, writer):
    await writer.upsert("theme", "bob", "dark")
    data = await engine.multiplex(["theme"], "alice")
    assert data["THEME"]["exists"] is False


async def test_multiplex_requires_keys(engine):
    with pytest.raises(ValidationError):
        await engine.multiplex([], "alice")


# ── search ───────────────────────────────────────────────────


async def test_search_empty_store(engine):
    page = await engine.search("", "alice", page=1, limit=10)

    assert page.total == 0
    assert page.last == 1
    assert page.data == []


async def test_search_filter_is_case_insensitive(engine, writer):
    await writer.upsert("db.host", "alice", "h")
    await writer.upsert("cache.ttl", "alice", "t")

    page = await engine.search("DB.h", "alice")
    assert [r.key for r in page.data] == ["DB.HOST"]


async def test_search_owner_filter(engine, writer):
    await writer.upsert("theme", "alice", "dark")
    await writer.upsert("theme", "bob", "light")

    assert (await engine.search("", "alice")).total == 1
    assert (await engine.search("", "")).total == 2


async def test_search_pagination(engine, writer):
    for i in range(7):
        await writer.upsert(f"key_{i}", "alice", i)

    page = await engine.search("", "alice", page=3, limit=3, sort="asc:key")

    assert [r.key for r in page.data] == ["KEY_6"]
    assert page.total == 7
    assert page.last == 3
    assert page.meta == {"page": 3, "limit": 3, "total": 7, "last": 3}


async def test_search_sort_reverses(engine, writer):
    for key in ("bbb", "aaa", "ccc"):
        await writer.upsert(key, "alice", "v")

    asc = await engine.search("", "alice", sort="asc:key")
    desc = await engine.search("", "alice", sort="desc:key")

    assert [r.key for r in asc.data] == ["AAA", "BBB", "CCC"]
    assert [r.key for r in desc.data] == list(reversed([r.key for r in asc.data]))


async def test_search_rows_omit_value(engine, writer):
    await writer.upsert("theme", "alice", "dark")
    page = await engine.search("", "alice")
    assert "value" not in page.to_dict()["data"][0]


@pytest.mark.parametrize("kwargs", [{"page": 0}, {"limit": 0}, {"sort": "sideways:key"}])
async def test_search_rejects_bad_arguments(engine, kwargs):
    with pytest.raises(ValidationError):
        await engine.search("", "alice", **kwargs)


def test_sort_options():
    assert set(SORT_OPTIONS) == {"desc:createdBy", "asc:createdBy", "desc:key", "asc:key"}
    assert parse_sort("desc:createdBy") == ("createdBy", True)
    assert parse_sort("asc:key") == ("key", False)
    assert parse_sort(None) == (None, False)
