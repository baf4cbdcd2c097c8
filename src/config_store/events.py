"""EventAdapter — replication events from other services.

Other services publish ``config.set`` and ``config.unset`` instead of calling
the store directly.  Delivery is best effort: a malformed payload or a failed
write is logged and dropped, never raised back to the broker.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any

from config_store.codec import ValueKind, classify
from config_store.exceptions import ConfigStoreError

if TYPE_CHECKING:
    from config_store.engines.deletion import DeletionEngine
    from config_store.engines.upsert import UpsertEngine

logger = logging.getLogger(__name__)

CONFIG_SET = "config.set"
CONFIG_UNSET = "config.unset"

EventHandler = Callable[[Any], Awaitable[None]]


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


class EventAdapter:
    """Validates event payloads and hands them to the write engines."""

    def __init__(self, upsert: UpsertEngine, deletion: DeletionEngine) -> None:
        self._upsert = upsert
        self._deletion = deletion

    def subscriptions(self) -> dict[str, EventHandler]:
        """Map each event name to its handler, ready to bind to a broker."""
        return {CONFIG_SET: self.on_set, CONFIG_UNSET: self.on_unset}

    async def handle(self, name: str, payload: Any) -> None:
        handler = self.subscriptions().get(name)
        if handler is None:
            logger.debug("ignoring unknown event %r", name)
            return
        await handler(payload)

    async def on_set(self, payload: Any) -> None:
        if not isinstance(payload, Mapping):
            self._drop(CONFIG_SET, "payload is not an object")
            return

        owner = payload.get("createdBy")
        key = payload.get("key")
        value = payload.get("value")

        if not _non_empty_str(owner):
            self._drop(CONFIG_SET, "createdBy must be a non-empty string")
            return
        if not _non_empty_str(key):
            self._drop(CONFIG_SET, "key must be a non-empty string")
            return
        if classify(value) is not ValueKind.STRUCTURED or len(value) == 0:
            self._drop(CONFIG_SET, "value must be a non-empty object or array", key=key)
            return

        try:
            await self._upsert.upsert(key, owner, value)
        except ConfigStoreError as exc:
            self._drop(CONFIG_SET, str(exc), key=key)

    async def on_unset(self, payload: Any) -> None:
        if not isinstance(payload, Mapping):
            self._drop(CONFIG_UNSET, "payload is not an object")
            return

        owner = payload.get("createdBy")
        key = payload.get("key")

        if not _non_empty_str(owner):
            self._drop(CONFIG_UNSET, "createdBy must be a non-empty string")
            return
        if key is not None and not _non_empty_str(key):
            self._drop(CONFIG_UNSET, "key must be a non-empty string when present")
            return

        try:
            await self._deletion.unset(key, owner)
        except ConfigStoreError as exc:
            self._drop(CONFIG_UNSET, str(exc), key=key)

    @staticmethod
    def _drop(event: str, reason: str, key: Any = None) -> None:
        logger.warning("dropped %s event key=%r: %s", event, key, reason)
