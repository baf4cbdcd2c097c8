"""Contract tests run against every RecordStore backend."""

import asyncio


# ── point lookups ────────────────────────────────────────────


async def test_get_nonexistent(store):
    assert await store.get("THEME", "alice") is None


async def test_upsert_and_get(store):
    record = await store.upsert("THEME", "alice", "dark")
    assert record.key == "THEME"
    assert record.created_by == "alice"
    assert record.value == "dark"
    assert record.created_at is not None
    assert record.created_at == record.updated_at

    fetched = await store.get("THEME", "alice")
    assert fetched == record


async def test_upsert_updates_in_place(store):
    first = await store.upsert("THEME", "alice", "dark")
    second = await store.upsert("THEME", "alice", "light")

    assert second.value == "light"
    assert second.created_at == first.created_at
    assert second.updated_at > first.updated_at
    assert await store.count("", None) == 1


async def test_owner_isolation(store):
    await store.upsert("THEME", "alice", "dark")
    await store.upsert("THEME", "bob", "light")

    assert (await store.get("THEME", "alice")).value == "dark"
    assert (await store.get("THEME", "bob")).value == "light"
    assert await store.get("THEME", "carol") is None


async def test_get_without_owner_prefers_smallest_owner(store):
    await store.upsert("THEME", "bob", "light")
    await store.upsert("THEME", "", "shared")
    await store.upsert("THEME", "alice", "dark")

    assert (await store.get("THEME", None)).value == "shared"


# ── batch and scans ──────────────────────────────────────────


async def test_find_many(store):
    await store.upsert("B_KEY", "alice", "2")
    await store.upsert("A_KEY", "alice", "1")
    await store.upsert("A_KEY", "bob", "x")

    records = await store.find_many(["A_KEY", "B_KEY", "MISSING"], "alice")
    assert [(r.key, r.value) for r in records] == [("A_KEY", "1"), ("B_KEY", "2")]

    records = await store.find_many(["A_KEY"], None)
    assert [r.created_by for r in records] == ["alice", "bob"]


async def test_search_substring_and_owner(store):
    await store.upsert("DB.HOST", "alice", "h")
    await store.upsert("DB.PORT", "alice", "p")
    await store.upsert("CACHE.TTL", "alice", "t")
    await store.upsert("DB.HOST", "bob", "h2")

    found = await store.search("DB.", "alice", offset=0, limit=10)
    assert [r.key for r in found] == ["DB.HOST", "DB.PORT"]
    assert await store.count("DB.", "alice") == 2
    assert await store.count("DB.", None) == 3


async def test_search_unsorted_follows_insertion_order(store):
    for key in ("CCC", "AAA", "BBB"):
        await store.upsert(key, "alice", "v")
    found = await store.search("", None, offset=0, limit=10)
    assert [r.key for r in found] == ["CCC", "AAA", "BBB"]


async def test_search_sort_by_owner_breaks_ties_by_insertion(store):
    await store.upsert("ONE", "bob", "v")
    await store.upsert("TWO", "alice", "v")
    await store.upsert("THREE", "bob", "v")

    asc = await store.search("", None, offset=0, limit=10, sort_field="createdBy")
    assert [r.key for r in asc] == ["TWO", "ONE", "THREE"]

    desc = await store.search(
        "", None, offset=0, limit=10, sort_field="createdBy", descending=True
    )
    assert [r.key for r in desc] == ["ONE", "THREE", "TWO"]


async def test_search_window(store):
    for i in range(5):
        await store.upsert(f"KEY_{i}", "alice", str(i))
    window = await store.search("", "alice", offset=2, limit=2, sort_field="key")
    assert [r.key for r in window] == ["KEY_2", "KEY_3"]


async def test_search_treats_wildcards_literally(store):
    await store.upsert("100%_DONE", "alice", "v")
    await store.upsert("100X_DONE", "alice", "v")
    found = await store.search("%_", None, offset=0, limit=10)
    assert [r.key for r in found] == ["100%_DONE"]


# ── batch writes ─────────────────────────────────────────────


async def test_upsert_many(store):
    await store.upsert("A_KEY", "alice", "old")
    records = await store.upsert_many([("A_KEY", "new"), ("B_KEY", "b")], "alice")

    assert [(r.key, r.value) for r in records] == [("A_KEY", "new"), ("B_KEY", "b")]
    assert await store.count("", "alice") == 2


# ── deletes ──────────────────────────────────────────────────


async def test_delete(store):
    await store.upsert("THEME", "alice", "dark")
    await store.upsert("THEME", "bob", "light")

    assert await store.delete("THEME", "alice") == 1
    assert await store.get("THEME", "alice") is None
    assert await store.get("THEME", "bob") is not None


async def test_delete_nonexistent(store):
    assert await store.delete("NOPE", "alice") == 0


async def test_delete_owner(store):
    await store.upsert("A_KEY", "alice", "1")
    await store.upsert("B_KEY", "alice", "2")
    await store.upsert("A_KEY", "bob", "3")

    assert await store.delete_owner("alice") == 2
    assert await store.count("", "alice") == 0
    assert await store.count("", "bob") == 1


async def test_values_with_quotes_are_stored_literally(store):
    value = "'); DROP TABLE configs; --"
    await store.upsert("EVIL", "o'brien", value)
    assert (await store.get("EVIL", "o'brien")).value == value


# ── concurrency ──────────────────────────────────────────────


async def test_concurrent_upserts_of_one_pair_keep_one_record(store):
    values = [f"v{i}" for i in range(20)]

    await asyncio.gather(*(store.upsert("THEME", "alice", value) for value in values))

    assert await store.count("", None) == 1
    assert (await store.get("THEME", "alice")).value in values


async def test_concurrent_upserts_of_distinct_pairs_all_land(store):
    pairs = [(f"KEY_{i}", owner) for i in range(10) for owner in ("alice", "bob")]

    await asyncio.gather(*(store.upsert(key, owner, "1") for key, owner in pairs))

    assert await store.count("", None) == len(pairs)
