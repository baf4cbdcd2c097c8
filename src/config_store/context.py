"""RequestContext — who is calling, carried into every direct action."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from config_store.codec import normalize_owner


@dataclass
class RequestContext:
    """Caller information supplied by the transport layer.

    Attributes:
        creator:   Raw principal identifier of the caller.  Becomes the
                   owner of everything the call writes.  ``""`` means the
                   caller is unscoped: reads see every owner.
        metadata:  Free-form data from the transport (request id, etc.).
        timestamp: When the request was received.  Auto-set to *now* (UTC)
                   if not provided.
    """

    creator: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def owner(self) -> str:
        return normalize_owner(self.creator)
