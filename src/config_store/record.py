"""ConfigRecord and SearchPage — the values the engines hand back."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ConfigRecord:
    """A single configuration value owned by one principal.

    Attributes:
        key:        Normalized (uppercase) configuration name.
        value:      Stored text inside a store; decoded payload once an
                    engine returns it.
        created_by: Normalized (lowercase) owner.  ``""`` is unscoped.
        created_at: Set by the store on insert.
        updated_at: Set by the store on insert and on every update.
    """

    key: str
    value: Any
    created_by: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def with_value(self, value: Any) -> ConfigRecord:
        return replace(self, value=value)

    def to_dict(self, include_value: bool = True) -> dict[str, Any]:
        data: dict[str, Any] = {"key": self.key}
        if include_value:
            data["value"] = self.value
        data["createdBy"] = self.created_by
        data["createdAt"] = self.created_at.isoformat() if self.created_at else None
        data["updatedAt"] = self.updated_at.isoformat() if self.updated_at else None
        return data


@dataclass(frozen=True)
class SearchPage:
    """One page of search results plus the pagination summary."""

    data: list[ConfigRecord] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total: int = 0
    last: int = 1

    @property
    def meta(self) -> dict[str, int]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "last": self.last,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": [record.to_dict(include_value=False) for record in self.data],
            "meta": self.meta,
        }
