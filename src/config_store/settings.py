"""Environment-driven settings for the runner."""

from __future__ import annotations

import os
from dataclasses import dataclass

from config_store.codec import KEY_MIN_LENGTH

DEFAULT_DATABASE_URL = "sqlite://:memory:"


def parse_database_url(url: str) -> tuple[str, str]:
    """Translate a database URL into a ``(store_type, path)`` pair.

    ``memory://`` selects the in-memory store.  ``sqlite://<path>`` and
    ``sqlite:///<relative path>`` select SQLite; an absolute path takes a
    fourth slash (``sqlite:////var/lib/configs.db``).  ``sqlite://:memory:``
    is an in-memory SQLite database.
    """
    if url in ("memory", "memory://"):
        return "memory", ""
    if url.startswith("sqlite:///"):
        return "sqlite", url[len("sqlite:///") :]
    if url.startswith("sqlite://"):
        path = url[len("sqlite://") :]
        if not path:
            raise ValueError("DATABASE_URL has no sqlite path")
        return "sqlite", path
    raise ValueError(f"Unsupported DATABASE_URL scheme: {url!r}")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass
class Settings:
    """Runtime configuration.

    Attributes:
        database_url:   Where records live (``DATABASE_URL``).
        key_min_length: Minimum trimmed key length (``CONFIG_KEY_MIN_LENGTH``).
        log_level:      Root log level (``LOG_LEVEL``).
        log_format:     ``"json"`` or ``"text"`` (``LOG_FORMAT``).
    """

    database_url: str = DEFAULT_DATABASE_URL
    key_min_length: int = KEY_MIN_LENGTH
    log_level: str = "INFO"
    log_format: str = "json"

    @classmethod
    def from_env(cls) -> Settings:
        log_format = os.getenv("LOG_FORMAT", "json").lower()
        if log_format not in ("json", "text"):
            raise ValueError(f"LOG_FORMAT must be 'json' or 'text', got {log_format!r}")
        return cls(
            database_url=os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
            key_min_length=_int_env("CONFIG_KEY_MIN_LENGTH", KEY_MIN_LENGTH),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_format=log_format,
        )

    @property
    def store_type(self) -> str:
        return parse_database_url(self.database_url)[0]

    @property
    def store_path(self) -> str:
        return parse_database_url(self.database_url)[1]
