"""Helpers for safe debug logging.

The store carries secrets through its secondary channel (a reset password
comes back as a plain string) and entity payloads may hold contact details.
This module redacts sensitive fields before they reach DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "updatedpassword",
        "updated_password",
        "secondaryresult",
        "secondary_result",
        "result",
        "token",
        "accesstoken",
        "access_token",
        "refreshtoken",
        "refresh_token",
        "jwt",
        "authorization",
        "cookie",
    }
)


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"

    # Pydantic models are logged through their dumped fields.
    dump = getattr(value, "model_dump", None)
    if callable(dump):
        value = dump()

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key.lower() in _SENSITIVE_VALUE_KEYS and v is not None:
                redacted[key] = "<redacted>"
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    # Fallback: represent unknown objects without dumping internals.
    return repr(value)
