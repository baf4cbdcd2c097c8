"""InMemoryStore — zero-config, dict-backed storage for development and testing."""

from __future__ import annotations

from dataclasses import replace
from itertools import count
from typing import TYPE_CHECKING

from config_store._internal.clock import Clock, SystemClock
from config_store.record import ConfigRecord
from config_store.stores.base import RecordStore

if TYPE_CHECKING:
    from collections.abc import Iterable

_Pair = tuple[str, str]


class InMemoryStore(RecordStore):
    """In-memory store keyed by ``(key, owner)``.  Data is lost on process exit."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._records: dict[_Pair, ConfigRecord] = {}
        self._seq: dict[_Pair, int] = {}
        self._counter = count()

    def _matching(self, owner: str | None, keys: Iterable[str] | None = None) -> list[ConfigRecord]:
        wanted = set(keys) if keys is not None else None
        return [
            record
            for (key, created_by), record in self._records.items()
            if (owner is None or created_by == owner) and (wanted is None or key in wanted)
        ]

    def _order(self, record: ConfigRecord) -> int:
        return self._seq[(record.key, record.created_by)]

    def _write(self, key: str, owner: str, value: str) -> ConfigRecord:
        now = self._clock.now()
        pair = (key, owner)
        existing = self._records.get(pair)
        if existing is None:
            record = ConfigRecord(key=key, value=value, created_by=owner, created_at=now, updated_at=now)
            self._seq[pair] = next(self._counter)
        else:
            record = replace(existing, value=value, updated_at=now)
        self._records[pair] = record
        return record

    # ── RecordStore protocol ─────────────────────────────────

    async def get(self, key: str, owner: str | None) -> ConfigRecord | None:
        matches = self._matching(owner, [key])
        if not matches:
            return None
        return min(matches, key=lambda r: (r.created_by, self._order(r)))

    async def find_many(self, keys: list[str], owner: str | None) -> list[ConfigRecord]:
        matches = self._matching(owner, keys)
        return sorted(matches, key=lambda r: (r.key, r.created_by, self._order(r)))

    async def search(
        self,
        contains: str,
        owner: str | None,
        *,
        offset: int,
        limit: int,
        sort_field: str | None = None,
        descending: bool = False,
    ) -> list[ConfigRecord]:
        matches = [r for r in self._matching(owner) if contains in r.key]
        matches.sort(key=self._order)
        if sort_field == "key":
            matches.sort(key=lambda r: r.key, reverse=descending)
        elif sort_field == "createdBy":
            matches.sort(key=lambda r: r.created_by, reverse=descending)
        return matches[offset : offset + limit]

    async def count(self, contains: str, owner: str | None) -> int:
        return sum(1 for r in self._matching(owner) if contains in r.key)

    async def upsert(self, key: str, owner: str, value: str) -> ConfigRecord:
        return self._write(key, owner, value)

    async def upsert_many(self, items: list[tuple[str, str]], owner: str) -> list[ConfigRecord]:
        # No awaits in between, so the batch is applied without interleaving.
        return [self._write(key, owner, value) for key, value in items]

    async def delete(self, key: str, owner: str) -> int:
        removed = self._records.pop((key, owner), None)
        self._seq.pop((key, owner), None)
        return 0 if removed is None else 1

    async def delete_owner(self, owner: str) -> int:
        pairs = [pair for pair in self._records if pair[1] == owner]
        for pair in pairs:
            del self._records[pair]
            del self._seq[pair]
        return len(pairs)
