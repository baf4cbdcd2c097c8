# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Data transfer objects for runner input/output and action parameters.

Parameter models carry the request-shape rules (minimum key length,
pagination bounds, sort values) so malformed requests are rejected before
they reach the engines.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, RootModel

SortOption = Literal["desc:createdBy", "asc:createdBy", "desc:key", "asc:key"]


class SearchParams(BaseModel):
    """Parameters of the ``search`` action.

    Attributes:
        key: Substring to look for in keys.  Omit to match everything.
        page: 1-based page number.
        limit: Page size.
        sort: Sort order, ``"<asc|desc>:<key|createdBy>"``.
    """

    key: str = Field(default="", min_length=3)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    sort: SortOption | None = None


class MultiplexParams(BaseModel):
    keys: list[str] = Field(min_length=1)


class GetParams(BaseModel):
    key: str = Field(min_length=3)


class SetParams(BaseModel):
    key: str = Field(min_length=3)
    value: Any


class BulkParams(RootModel[dict[str, Any]]):
    """Root object of ``bulk``: every property is a key to set."""


class UnsetParams(BaseModel):
    key: str | None = Field(default=None, min_length=3)


class MetaSchema(BaseModel):
    """Caller metadata supplied by the transport.

    Attributes:
        creator: Principal making the call; owner of everything it writes.
    """

    creator: str = ""


class StoreConfigSchema(BaseModel):
    """Store configuration.

    Attributes:
        type: Store type ("memory" or "sqlite")
        path: Path to SQLite database file (for sqlite type)
    """

    type: Literal["memory", "sqlite"] = "memory"
    path: str = ""


class RunnerInput(BaseModel):
    """Complete request read from stdin.

    Attributes:
        kind: ``"action"`` for a direct call, ``"event"`` for a
            replication event.
        name: Action name (``"set"``, ``"get"``, ...) or event name
            (``"config.set"``, ``"config.unset"``).
        params: Action parameters or event payload.
        meta: Caller metadata.  Ignored for events, whose payload names
            its own owner.
        store: Store configuration.  Falls back to ``DATABASE_URL`` when
            omitted.
    """

    kind: Literal["action", "event"] = "action"
    name: str
    params: Any = Field(default_factory=dict)
    meta: MetaSchema = Field(default_factory=MetaSchema)
    store: StoreConfigSchema | None = None


class RunnerOutput(BaseModel):
    """Complete response written to stdout.

    The runner always outputs valid JSON matching this schema, even on
    errors.

    Attributes:
        success: Whether the call completed with a 2xx code
        code: HTTP-like status code
        i18n: Message identifier
        data: Action payload
        meta: Envelope extras (pagination)
        error: Error message (on failure, never raw storage detail)
        error_type: Error class name (on failure)
    """

    success: bool
    code: int = 200
    i18n: str = ""
    data: Any = None
    meta: dict[str, Any] = Field(default_factory=dict)
    error: str = ""
    error_type: str = ""
