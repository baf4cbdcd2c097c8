"""config_store — an owner-scoped key-value configuration store.

Every record belongs to one owner.  Direct calls and replication events
funnel into the same upsert, retrieval and deletion engines, so both paths
write identical rows.
"""

from config_store.context import RequestContext
from config_store.events import CONFIG_SET, CONFIG_UNSET, EventAdapter
from config_store.exceptions import (
    ConfigStoreError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from config_store.manager import ConfigManager
from config_store.record import ConfigRecord, SearchPage
from config_store.result import ActionResult

__all__ = [
    "CONFIG_SET",
    "CONFIG_UNSET",
    "ActionResult",
    "ConfigManager",
    "ConfigRecord",
    "ConfigStoreError",
    "EventAdapter",
    "NotFoundError",
    "RequestContext",
    "SearchPage",
    "StoreError",
    "ValidationError",
]
