"""RetrievalEngine — single get, multiplex get and paginated search."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from config_store.codec import KEY_MIN_LENGTH, decode_value, normalize_key, normalize_owner
from config_store.exceptions import NotFoundError, ValidationError
from config_store.record import SearchPage
from config_store.stores.base import SORT_FIELDS

if TYPE_CHECKING:
    from config_store.record import ConfigRecord
    from config_store.stores.base import RecordStore

SORT_OPTIONS = tuple(f"{order}:{name}" for name in SORT_FIELDS for order in ("desc", "asc"))


def parse_sort(sort: str | None) -> tuple[str | None, bool]:
    """Split ``"desc:key"`` into ``("key", True)``.  ``None`` means unsorted."""
    if sort is None:
        return None, False
    if sort not in SORT_OPTIONS:
        raise ValidationError("sort", f"must be one of {', '.join(SORT_OPTIONS)}")
    order, field = sort.split(":", 1)
    return field, order == "desc"


def _owner_filter(owner: str) -> str | None:
    norm = normalize_owner(owner)
    return norm or None


class RetrievalEngine:
    """Read side of the store.

    An empty owner disables owner filtering for every read.
    """

    def __init__(self, store: RecordStore, key_min_length: int = KEY_MIN_LENGTH) -> None:
        self.store = store
        self.key_min_length = key_min_length

    async def get(self, key: str, owner: str) -> ConfigRecord:
        norm_key = normalize_key(key, self.key_min_length)
        norm_owner = _owner_filter(owner)

        record = await self.store.get(norm_key, norm_owner)
        if record is None:
            raise NotFoundError(norm_key, norm_owner or "")
        return record.with_value(decode_value(record.value))

    async def multiplex(self, keys: list[str], owner: str) -> dict[str, dict[str, Any]]:
        """Fetch many keys at once, reporting existence for each.

        Every distinct normalized key appears exactly once in the result,
        in order of first appearance.
        """
        if not keys:
            raise ValidationError("keys", "must contain at least one key")

        wanted = list(dict.fromkeys(normalize_key(key, 0) for key in keys))
        found: dict[str, ConfigRecord] = {}
        for record in await self.store.find_many(wanted, _owner_filter(owner)):
            found.setdefault(record.key, record)

        data: dict[str, dict[str, Any]] = {}
        for key in wanted:
            record = found.get(key)
            if record is None:
                data[key] = {"exists": False, "key": key, "value": None}
            else:
                data[key] = {"exists": True, **record.to_dict()}
                data[key]["value"] = decode_value(record.value)
        return data

    async def search(
        self,
        key_filter: str = "",
        owner: str = "",
        page: int = 1,
        limit: int = 10,
        sort: str | None = None,
    ) -> SearchPage:
        if page < 1:
            raise ValidationError("page", "must be a positive integer")
        if limit < 1:
            raise ValidationError("limit", "must be a positive integer")
        sort_field, descending = parse_sort(sort)

        contains = normalize_key(key_filter or "", 0)
        norm_owner = _owner_filter(owner)

        records = await self.store.search(
            contains,
            norm_owner,
            offset=(page - 1) * limit,
            limit=limit,
            sort_field=sort_field,
            descending=descending,
        )
        total = await self.store.count(contains, norm_owner)
        return SearchPage(
            data=[record.with_value(decode_value(record.value)) for record in records],
            page=page,
            limit=limit,
            total=total,
            last=max(math.ceil(total / limit), 1),
        )
