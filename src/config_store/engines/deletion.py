"""DeletionEngine — single-key and owner-wide removal."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config_store.codec import KEY_MIN_LENGTH, normalize_key, normalize_owner

if TYPE_CHECKING:
    from config_store.stores.base import RecordStore

logger = logging.getLogger(__name__)


class DeletionEngine:
    def __init__(self, store: RecordStore, key_min_length: int = KEY_MIN_LENGTH) -> None:
        self.store = store
        self.key_min_length = key_min_length

    async def unset(self, key: str | None, owner: str) -> int:
        """Delete ``key`` for ``owner``, or every record of ``owner`` when ``key`` is ``None``.

        The owner always matches exactly: an empty owner only reaches
        unscoped records.  Returns the number of records removed.
        """
        norm_owner = normalize_owner(owner)
        if key is None:
            removed = await self.store.delete_owner(norm_owner)
            logger.debug("config unset all owner=%r removed=%d", norm_owner, removed)
            return removed

        norm_key = normalize_key(key, self.key_min_length)
        removed = await self.store.delete(norm_key, norm_owner)
        logger.debug("config unset key=%s owner=%r removed=%d", norm_key, norm_owner, removed)
        return removed
