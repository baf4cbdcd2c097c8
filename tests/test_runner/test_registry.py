"""Tests for the action registry and parameter schemas."""

import pytest
from pydantic import ValidationError

from config_store.result import ActionResult
from config_store.runner.registry import ActionRegistry, ActionSpec, UnknownActionError
from config_store.runner.schema import BulkParams, SearchParams, SetParams, UnsetParams


class TestActionRegistry:
    def test_registered_actions_includes_all(self):
        actions = ActionRegistry.registered_actions()
        for name in ("search", "multiplex", "get", "set", "bulk", "unset"):
            assert name in actions

    def test_unknown_action_lists_available(self):
        with pytest.raises(UnknownActionError) as exc_info:
            ActionRegistry.get("reset")
        assert "Available actions" in str(exc_info.value)
        assert "multiplex" in str(exc_info.value)

    def test_duplicate_registration_rejected(self):
        with pytest.raises(ValueError, match="already registered"):
            ActionRegistry.register(ActionRegistry.get("get"))

    def test_register_custom_action(self, monkeypatch):
        monkeypatch.setattr(ActionRegistry, "_registry", dict(ActionRegistry._registry))

        async def ping(manager, ctx, params):
            return ActionResult.success("PONG")

        ActionRegistry.register(ActionSpec("ping", SearchParams, ping))
        assert ActionRegistry.get("ping").handler is ping


class TestSchemas:
    def test_search_defaults(self):
        params = SearchParams.model_validate({})
        assert (params.key, params.page, params.limit, params.sort) == ("", 1, 10, None)

    def test_search_explicit_short_key_rejected(self):
        with pytest.raises(ValidationError):
            SearchParams.model_validate({"key": "ab"})

    def test_set_requires_value(self):
        with pytest.raises(ValidationError):
            SetParams.model_validate({"key": "theme"})

    def test_set_accepts_null_value(self):
        assert SetParams.model_validate({"key": "theme", "value": None}).value is None

    def test_bulk_root_object(self):
        params = BulkParams.model_validate({"theme": "dark", "limits": {"max": 1}})
        assert params.root == {"theme": "dark", "limits": {"max": 1}}

    def test_bulk_rejects_non_object(self):
        with pytest.raises(ValidationError):
            BulkParams.model_validate(["theme"])

    def test_unset_key_optional(self):
        assert UnsetParams.model_validate({}).key is None
