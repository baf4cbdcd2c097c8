"""ConfigManager — the single entry point in front of the engines."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from config_store.codec import KEY_MIN_LENGTH
from config_store.engines import DeletionEngine, RetrievalEngine, UpsertEngine
from config_store.events import EventAdapter
from config_store.stores.memory import InMemoryStore

if TYPE_CHECKING:
    from config_store.context import RequestContext
    from config_store.record import ConfigRecord, SearchPage
    from config_store.stores.base import RecordStore


class ConfigManager:
    """Owner-scoped configuration actions over one store.

    Direct actions take the caller's :class:`RequestContext`; its
    ``creator`` decides which owner is read and written.  Replication
    events go through :attr:`events` and land in the same engines.

    Parameters:
        store:          Persistence backend.  Defaults to
                        :class:`InMemoryStore` when omitted.
        key_min_length: Minimum trimmed key length for get/set/bulk/unset.
    """

    def __init__(self, store: RecordStore | None = None, key_min_length: int = KEY_MIN_LENGTH) -> None:
        self._store: RecordStore = store or InMemoryStore()
        self._upsert = UpsertEngine(self._store, key_min_length)
        self._retrieval = RetrievalEngine(self._store, key_min_length)
        self._deletion = DeletionEngine(self._store, key_min_length)
        self._events = EventAdapter(self._upsert, self._deletion)

    # ── reads ────────────────────────────────────────────────

    async def search(
        self,
        ctx: RequestContext,
        key: str = "",
        page: int = 1,
        limit: int = 10,
        sort: str | None = None,
    ) -> SearchPage:
        return await self._retrieval.search(key, ctx.owner, page=page, limit=limit, sort=sort)

    async def multiplex(self, ctx: RequestContext, keys: list[str]) -> dict[str, dict[str, Any]]:
        return await self._retrieval.multiplex(keys, ctx.owner)

    async def get(self, ctx: RequestContext, key: str) -> ConfigRecord:
        """Return the caller's record for ``key``.  Raises ``NotFoundError``."""
        return await self._retrieval.get(key, ctx.owner)

    # ── writes ───────────────────────────────────────────────

    async def set(self, ctx: RequestContext, key: str, value: Any) -> ConfigRecord:
        return await self._upsert.upsert(key, ctx.owner, value)

    async def bulk(self, ctx: RequestContext, values: Mapping[str, Any]) -> list[str]:
        """Set every pair of ``values`` at once.  Returns the normalized keys."""
        return await self._upsert.bulk(values, ctx.owner)

    async def unset(self, ctx: RequestContext, key: str | None = None) -> int:
        """Delete one key, or all of the caller's keys when ``key`` is omitted."""
        return await self._deletion.unset(key, ctx.owner)

    # ── plumbing ─────────────────────────────────────────────

    @property
    def events(self) -> EventAdapter:
        return self._events

    @property
    def store(self) -> RecordStore:
        return self._store

    async def close(self) -> None:
        await self._store.close()
