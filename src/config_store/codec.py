"""Key, owner and value normalization.

Keys are configuration names and are compared uppercase.  Owners are
principal identifiers and are compared lowercase.  Values are persisted as
text: structured payloads as compact JSON, strings verbatim, other scalars
as their JSON literal.  Reading back tries JSON first and falls back to the
raw text, so plain strings survive without quoting.
"""

from __future__ import annotations

import json
import math
from enum import Enum
from typing import Any

from config_store.exceptions import ValidationError

KEY_MIN_LENGTH = 3


class ValueKind(str, Enum):
    """Tag for the two shapes a configuration value can take."""

    STRUCTURED = "structured"
    SCALAR = "scalar"


def normalize_key(raw: Any, min_length: int = KEY_MIN_LENGTH) -> str:
    """Return ``raw`` trimmed and uppercased.

    Raises:
        ValidationError: ``raw`` is not a string, or is shorter than
            ``min_length`` once trimmed.  ``min_length=0`` disables the
            length check.
    """
    if not isinstance(raw, str):
        raise ValidationError("key", "must be a string", code="KEY_NOT_STRING")
    key = raw.strip().upper()
    if len(key) < min_length:
        raise ValidationError(
            "key",
            f"must be at least {min_length} characters long",
            code="KEY_TOO_SHORT",
        )
    return key


def normalize_owner(raw: str | None) -> str:
    """Return ``raw`` trimmed and lowercased.  ``""`` means unscoped."""
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise ValidationError("createdBy", "must be a string", code="OWNER_NOT_STRING")
    return raw.strip().lower()


def classify(value: Any) -> ValueKind:
    if isinstance(value, (dict, list, tuple)):
        return ValueKind.STRUCTURED
    return ValueKind.SCALAR


def encode_value(value: Any) -> str:
    """Encode ``value`` into its stored text form."""
    if isinstance(value, str):
        return value
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError("value", "must be a finite number", code="VALUE_NOT_SERIALIZABLE")
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as exc:
        raise ValidationError(
            "value", f"is not JSON-serializable ({exc})", code="VALUE_NOT_SERIALIZABLE"
        ) from exc


def decode_value(stored: str | None) -> Any:
    """Decode stored text, falling back to the raw text when it is not JSON."""
    if stored is None:
        return None
    try:
        return json.loads(stored)
    except (TypeError, ValueError):
        return stored
