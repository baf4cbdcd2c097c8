"""
config_store — Hello World

Every record belongs to one owner. Direct calls and replication events
land in the same engines, so both paths write the same rows.
"""

import asyncio

from config_store import ConfigManager, NotFoundError, RequestContext
from config_store.stores import SQLiteStore


async def main():
    # ──────────────────────────────────────
    #  1. Create the manager over a store
    # ──────────────────────────────────────
    manager = ConfigManager(store=SQLiteStore(":memory:"))

    alice = RequestContext(creator="alice@acme.com")
    bob = RequestContext(creator="bob@acme.com")
    operator = RequestContext(creator="")  # unscoped: reads see every owner

    # ──────────────────────────────────────
    #  2. Set and get
    # ──────────────────────────────────────
    print("=== Set and get ===\n")

    await manager.set(alice, "theme", {"mode": "dark", "contrast": "high"})
    await manager.set(alice, "Theme ", {"mode": "light"})  # same pair, updated in place

    record = await manager.get(alice, "THEME")
    print(f"  {record.key} for {record.created_by}: {record.value}")

    try:
        await manager.get(bob, "theme")
    except NotFoundError as exc:
        print(f"  bob: {exc}")

    # ──────────────────────────────────────
    #  3. Bulk and multiplex
    # ──────────────────────────────────────
    print("\n=== Bulk and multiplex ===\n")

    keys = await manager.bulk(bob, {"locale": "en-GB", "limits": {"max_upload_mb": 25}})
    print(f"  bob wrote: {keys}")

    data = await manager.multiplex(bob, ["locale", "limits", "timezone"])
    for key, entry in data.items():
        print(f"  {key:<8} exists={entry['exists']!s:<5} value={entry['value']}")

    # ──────────────────────────────────────
    #  4. Search across owners
    # ──────────────────────────────────────
    print("\n=== Search ===\n")

    page = await manager.search(operator, sort="asc:createdBy", limit=2)
    print(f"  meta: {page.meta}")
    for row in page.to_dict()["data"]:
        print(f"  {row['createdBy']:<16} {row['key']}")

    # ──────────────────────────────────────
    #  5. Replication events
    # ──────────────────────────────────────
    print("\n=== Events ===\n")

    await manager.events.handle(
        "config.set", {"key": "feature.flags", "value": {"beta": True}, "createdBy": "carol"}
    )
    await manager.events.handle("config.set", {"key": "broken"})  # dropped, logged
    print(f"  carol sees: {(await manager.get(RequestContext(creator='carol'), 'feature.flags')).value}")

    await manager.events.handle("config.unset", {"createdBy": "alice@acme.com"})
    print(f"  alice records left: {(await manager.search(alice)).total}")

    await manager.close()


if __name__ == "__main__":
    asyncio.run(main())
