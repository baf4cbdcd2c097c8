# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Action registry mapping action names to parameter schemas and handlers.

Uses the Registry pattern so new actions can be added without modifying
the executor.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel

from config_store.result import ActionResult

from .schema import (
    BulkParams,
    GetParams,
    MultiplexParams,
    SearchParams,
    SetParams,
    UnsetParams,
)

if TYPE_CHECKING:
    from config_store.context import RequestContext
    from config_store.manager import ConfigManager

ActionHandler = Callable[..., Awaitable[ActionResult]]


class UnknownActionError(Exception):
    """Raised when no action is registered under the requested name."""


@dataclass(frozen=True)
class ActionSpec:
    """A registered action.

    Attributes:
        name: Action name used by callers.
        params: Pydantic model validating the raw parameters.
        handler: Coroutine receiving the manager, the caller context and
            the validated parameters.
    """

    name: str
    params: type[BaseModel]
    handler: ActionHandler


async def _search(manager: ConfigManager, ctx: RequestContext, p: SearchParams) -> ActionResult:
    page = await manager.search(ctx, p.key, page=p.page, limit=p.limit, sort=p.sort)
    body = page.to_dict()
    return ActionResult.success("CONFIGS_FOUND", body["data"], **body["meta"])


async def _multiplex(
    manager: ConfigManager, ctx: RequestContext, p: MultiplexParams
) -> ActionResult:
    return ActionResult.success("CONFIGS_FOUND", await manager.multiplex(ctx, p.keys))


async def _get(manager: ConfigManager, ctx: RequestContext, p: GetParams) -> ActionResult:
    record = await manager.get(ctx, p.key)
    return ActionResult.success("CONFIG_FOUND", record.to_dict())


async def _set(manager: ConfigManager, ctx: RequestContext, p: SetParams) -> ActionResult:
    record = await manager.set(ctx, p.key, p.value)
    return ActionResult.success(
        "CONFIG_SET",
        {"key": record.key, "value": record.value, "createdBy": record.created_by},
    )


async def _bulk(manager: ConfigManager, ctx: RequestContext, p: BulkParams) -> ActionResult:
    keys = await manager.bulk(ctx, p.root)
    return ActionResult.success("CONFIGS_SET", {"keys": keys})


async def _unset(manager: ConfigManager, ctx: RequestContext, p: UnsetParams) -> ActionResult:
    removed = await manager.unset(ctx, p.key)
    return ActionResult.success("CONFIG_UNSET", {"deleted": removed})


class ActionRegistry:
    """Looks up actions by name.

    Example:
        spec = ActionRegistry.get("set")
        params = spec.params.model_validate({"key": "theme", "value": "dark"})
        result = await spec.handler(manager, ctx, params)
    """

    # Class-level registry mapping action names to specs
    _registry: ClassVar[dict[str, ActionSpec]] = {
        "search": ActionSpec("search", SearchParams, _search),
        "multiplex": ActionSpec("multiplex", MultiplexParams, _multiplex),
        "get": ActionSpec("get", GetParams, _get),
        "set": ActionSpec("set", SetParams, _set),
        "bulk": ActionSpec("bulk", BulkParams, _bulk),
        "unset": ActionSpec("unset", UnsetParams, _unset),
    }

    @classmethod
    def register(cls, spec: ActionSpec) -> None:
        """Register an additional action.

        Raises:
            ValueError: If an action with the same name already exists.
        """
        if spec.name in cls._registry:
            raise ValueError(f"Action '{spec.name}' is already registered")
        cls._registry[spec.name] = spec

    @classmethod
    def registered_actions(cls) -> list[str]:
        return list(cls._registry.keys())

    @classmethod
    def get(cls, name: str) -> ActionSpec:
        spec = cls._registry.get(name)
        if spec is None:
            available = ", ".join(sorted(cls._registry))
            raise UnknownActionError(f"Unknown action: '{name}'. Available actions: {available}")
        return spec
