"""Custom exceptions for the config_store package."""

from __future__ import annotations


class ConfigStoreError(Exception):
    """Base exception for all configuration store errors."""


class ValidationError(ConfigStoreError):
    """Raised when a key, owner or value cannot be accepted."""

    def __init__(self, field: str, message: str, code: str = "INVALID") -> None:
        self.field = field
        self.code = code
        super().__init__(f"Invalid '{field}': {message}")


class NotFoundError(ConfigStoreError):
    """Raised when a single-key lookup matches no record."""

    def __init__(self, key: str, owner: str = "") -> None:
        self.key = key
        self.owner = owner
        msg = f"Config '{key}' not found"
        if owner:
            msg += f" for '{owner}'"
        super().__init__(msg)


class StoreError(ConfigStoreError):
    """Raised when a store operation fails.

    ``detail`` carries the backend's message for logs only; callers outside
    the process should see a generic failure.
    """

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"Store error during '{operation}'")
