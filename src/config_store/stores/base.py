"""RecordStore protocol — the persistence contract the engines rely on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from config_store.record import ConfigRecord

SORT_FIELDS = ("key", "createdBy")


class RecordStore(ABC):
    """Abstract base for all storage backends.

    Records are addressed by the pair ``(key, owner)`` and the store must
    never hold two records for the same pair.  Keys, owners and values
    arrive already normalized and encoded; the store treats them as opaque
    text.  Wherever a read method accepts ``owner=None`` no owner filter is
    applied.

    Backends wrap their own failures in :class:`~config_store.exceptions.StoreError`.
    """

    @abstractmethod
    async def get(self, key: str, owner: str | None) -> ConfigRecord | None:
        """Return the record for ``key``, or ``None``.

        Without an owner filter the record with the smallest owner wins.
        """
        ...

    @abstractmethod
    async def find_many(self, keys: list[str], owner: str | None) -> list[ConfigRecord]:
        """Return every record whose key is in ``keys``.

        Ordered by key, then owner, then insertion.
        """
        ...

    @abstractmethod
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
        """Return one window of records whose key contains ``contains``.

        ``sort_field`` is one of :data:`SORT_FIELDS`; ties and unsorted
        results follow insertion order.
        """
        ...

    @abstractmethod
    async def count(self, contains: str, owner: str | None) -> int:
        """Return how many records :meth:`search` would match in total."""
        ...

    @abstractmethod
    async def upsert(self, key: str, owner: str, value: str) -> ConfigRecord:
        """Insert the pair, or update its value if it exists, atomically."""
        ...

    @abstractmethod
    async def upsert_many(self, items: list[tuple[str, str]], owner: str) -> list[ConfigRecord]:
        """Upsert every ``(key, value)`` for ``owner``; all or nothing."""
        ...

    @abstractmethod
    async def delete(self, key: str, owner: str) -> int:
        """Delete the record for the pair.  Returns the number removed."""
        ...

    @abstractmethod
    async def delete_owner(self, owner: str) -> int:
        """Delete every record of ``owner``.  Returns the number removed."""
        ...

    async def close(self) -> None:
        """Release backend resources.  The default does nothing."""
