"""ActionResult — the response envelope returned to transport layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ActionResult:
    """Immutable outcome of one action or event delivery.

    Attributes:
        code: HTTP-like status code (200, 202, 404, 422, 500).
        i18n: Message identifier the caller can translate, e.g.
              ``"CONFIG_SET"``.  Identifiers starting with ``#`` are
              generic errors.
        data: Action payload.
        meta: Extra envelope data (pagination for search).
    """

    code: int
    i18n: str = ""
    data: Any = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.code < 300

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"code": self.code, "i18n": self.i18n}
        if self.meta:
            out["meta"] = self.meta
        if self.data is not None:
            out["data"] = self.data
        return out

    # ── Factory helpers ──────────────────────────────────────

    @staticmethod
    def success(i18n: str, data: Any = None, **meta: Any) -> ActionResult:
        return ActionResult(code=200, i18n=i18n, data=data, meta=meta)

    @staticmethod
    def accepted() -> ActionResult:
        return ActionResult(code=202, i18n="EVENT_ACCEPTED")

    @staticmethod
    def not_found(i18n: str, **data: Any) -> ActionResult:
        return ActionResult(code=404, i18n=i18n, data=data or None)

    @staticmethod
    def invalid(errors: list[dict[str, Any]]) -> ActionResult:
        return ActionResult(code=422, i18n="#VALIDATION_ERROR", data={"errors": errors})

    @staticmethod
    def internal_error() -> ActionResult:
        return ActionResult(code=500, i18n="#INTERNAL_SERVER_ERROR")
