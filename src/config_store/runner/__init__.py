# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Runner submodule: a JSON-in, JSON-out front end for the store.

Usage:
    python -m config_store.runner < request.json > response.json

Exports:
    Executor: Runs one request against a configured store
    ActionRegistry: Maps action names to parameter schemas and handlers
    RunnerInput: Request schema read from stdin
    RunnerOutput: Response schema written to stdout
"""

from .executor import ExecutionError, Executor
from .registry import ActionRegistry, ActionSpec, UnknownActionError
from .schema import (
    BulkParams,
    GetParams,
    MetaSchema,
    MultiplexParams,
    RunnerInput,
    RunnerOutput,
    SearchParams,
    SetParams,
    StoreConfigSchema,
    UnsetParams,
)

__all__ = [
    "ActionRegistry",
    "ActionSpec",
    "BulkParams",
    "ExecutionError",
    "Executor",
    "GetParams",
    "MetaSchema",
    "MultiplexParams",
    "RunnerInput",
    "RunnerOutput",
    "SearchParams",
    "SetParams",
    "StoreConfigSchema",
    "UnknownActionError",
    "UnsetParams",
]
