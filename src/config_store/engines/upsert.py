"""UpsertEngine — every write path ends here."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from config_store.codec import KEY_MIN_LENGTH, encode_value, normalize_key, normalize_owner
from config_store.exceptions import ValidationError

if TYPE_CHECKING:
    from config_store.record import ConfigRecord
    from config_store.stores.base import RecordStore

logger = logging.getLogger(__name__)


class UpsertEngine:
    """Creates or updates the single record of a ``(key, owner)`` pair.

    The store performs the write as one atomic conditional statement, so
    two concurrent upserts of the same pair can only produce one record.

    Parameters:
        store:          Backend receiving the writes.
        key_min_length: Minimum trimmed key length accepted.
    """

    def __init__(self, store: RecordStore, key_min_length: int = KEY_MIN_LENGTH) -> None:
        self.store = store
        self.key_min_length = key_min_length

    async def upsert(self, key: str, owner: str, value: Any) -> ConfigRecord:
        """Write ``value`` under ``(key, owner)``.

        Returns the stored record carrying the caller's original ``value``.
        """
        norm_key = normalize_key(key, self.key_min_length)
        norm_owner = normalize_owner(owner)
        encoded = encode_value(value)

        record = await self.store.upsert(norm_key, norm_owner, encoded)
        logger.debug("config set key=%s owner=%r", norm_key, norm_owner)
        return record.with_value(value)

    async def bulk(self, values: Mapping[str, Any], owner: str) -> list[str]:
        """Upsert every pair of ``values`` under one owner.

        All keys and values are validated before anything is written, and
        the store applies the batch atomically.  Keys that collide after
        normalization keep the last value.
        """
        if not isinstance(values, Mapping):
            raise ValidationError("values", "must be a mapping of key to value")

        norm_owner = normalize_owner(owner)
        pending: dict[str, str] = {}
        for raw_key, value in values.items():
            pending[normalize_key(raw_key, self.key_min_length)] = encode_value(value)

        if not pending:
            return []

        await self.store.upsert_many(list(pending.items()), norm_owner)
        logger.debug("config bulk set count=%d owner=%r", len(pending), norm_owner)
        return list(pending)
