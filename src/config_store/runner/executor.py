# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Executor for running one action or event against a configured store.

Orchestrates the full execution flow:
1. Create store from configuration
2. Build ConfigManager over it
3. Validate action parameters
4. Run the action, or deliver the event
5. Translate the outcome (or the error) into RunnerOutput
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as SchemaValidationError

from config_store import ConfigManager, RequestContext
from config_store.exceptions import NotFoundError, StoreError, ValidationError
from config_store.result import ActionResult
from config_store.settings import Settings
from config_store.stores import InMemoryStore, RecordStore, SQLiteStore

from .registry import ActionRegistry, UnknownActionError
from .schema import RunnerInput, RunnerOutput, StoreConfigSchema

logger = logging.getLogger(__name__)


class ExecutionError(Exception):
    """Raised when the runner cannot be set up for a request."""

    pass


class Executor:
    """Executes one request against a store.

    Responsibilities:
    - Create store from configuration
    - Validate parameters and dispatch actions
    - Deliver events to the event adapter
    - Translate results and errors to the output schema

    The executor is designed for dependency injection to support testing.
    Pass a custom store to the constructor to override store creation.

    Example:
        executor = Executor()
        output = await executor.execute(input_data)

        # For testing with a shared store:
        executor = Executor(store=InMemoryStore())
    """

    def __init__(self, store: RecordStore | None = None, settings: Settings | None = None) -> None:
        """Initialize executor.

        Args:
            store: Optional store to use instead of creating from config.
                   Useful for testing.  The executor never closes it.
            settings: Settings used when the input has no store section.
                   Defaults to :meth:`Settings.from_env`.
        """
        self._injected_store = store
        self._settings = settings

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = Settings.from_env()
        return self._settings

    async def execute(self, input_data: RunnerInput) -> RunnerOutput:
        """Execute the request.

        This method catches all exceptions and returns them as
        RunnerOutput errors, ensuring valid JSON is always returned.
        Storage details are logged, never returned.
        """
        try:
            return self._to_output(await self._execute_internal(input_data))
        except SchemaValidationError as e:
            return self._to_output(ActionResult.invalid(self._schema_errors(e)), e)
        except ValidationError as e:
            errors = [{"loc": [e.field], "msg": str(e), "type": e.code}]
            return self._to_output(ActionResult.invalid(errors), e)
        except NotFoundError as e:
            return self._to_output(ActionResult.not_found("CONFIG_NOT_FOUND", key=e.key), e)
        except UnknownActionError as e:
            return RunnerOutput(
                success=False,
                code=404,
                i18n="#UNKNOWN_ACTION",
                error=str(e),
                error_type="UnknownActionError",
            )
        except StoreError as e:
            logger.error("store failure during %s: %s", e.operation, e.detail)
            return self._to_output(ActionResult.internal_error(), e)
        except ExecutionError as e:
            return RunnerOutput(
                success=False,
                code=500,
                i18n="#INTERNAL_SERVER_ERROR",
                error=str(e),
                error_type="ExecutionError",
            )
        except Exception as e:
            logger.exception("unexpected failure handling %s %r", input_data.kind, input_data.name)
            return RunnerOutput(
                success=False,
                code=500,
                i18n="#INTERNAL_SERVER_ERROR",
                error="Internal server error",
                error_type=type(e).__name__,
            )

    async def _execute_internal(self, input_data: RunnerInput) -> ActionResult:
        """Internal execution logic.

        Separated from execute() to allow exception propagation
        for testing while execute() catches all errors.
        """
        store = self._injected_store or self._create_store(input_data.store)
        owns_store = self._injected_store is None

        try:
            manager = ConfigManager(store=store, key_min_length=self.settings.key_min_length)

            if input_data.kind == "event":
                await manager.events.handle(input_data.name, input_data.params)
                return ActionResult.accepted()

            spec = ActionRegistry.get(input_data.name)
            params = spec.params.model_validate(input_data.params)
            ctx = RequestContext(
                creator=input_data.meta.creator,
                metadata={"action": input_data.name},
            )
            return await spec.handler(manager, ctx, params)
        finally:
            if owns_store:
                await store.close()

    def _create_store(self, config: StoreConfigSchema | None) -> RecordStore:
        """Create store from configuration, or from settings when absent."""
        if config is None:
            try:
                store_type, path = self.settings.store_type, self.settings.store_path
            except ValueError as e:
                raise ExecutionError(str(e)) from e
            config = StoreConfigSchema(type=store_type, path=path)

        if config.type == "sqlite":
            if not config.path:
                raise ExecutionError("SQLite store requires 'path' configuration")
            return SQLiteStore(config.path)
        return InMemoryStore()

    @staticmethod
    def _schema_errors(error: SchemaValidationError) -> list[dict[str, Any]]:
        return [
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in error.errors()
        ]

    @staticmethod
    def _to_output(result: ActionResult, error: Exception | None = None) -> RunnerOutput:
        return RunnerOutput(
            success=result.ok,
            code=result.code,
            i18n=result.i18n,
            data=result.data,
            meta=result.meta,
            error="" if error is None or isinstance(error, StoreError) else str(error),
            error_type="" if error is None else type(error).__name__,
        )
