"""Helpers for safe debug logging.

Load payloads carry auth records (OAuth tokens, refresh tokens, cookies)
and avatar data URIs that can run to hundreds of kilobytes.  This module
provides a small utility that masks auth data, summarises data URIs and
truncates long strings before emitting DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "token",
        "accesstoken",
        "access_token",
        "refreshtoken",
        "refresh_token",
        "idtoken",
        "id_token",
        "authcode",
        "auth_code",
        "authorization",
        "cookie",
        "cookies",
        "secret",
        "clientsecret",
        "client_secret",
    }
)

# Provider-defined auth blobs: keys are kept for debugging, every value is masked.
_OPAQUE_AUTH_KEYS: frozenset[str] = frozenset({"authdata", "auth_data"})

_DATA_URI_PREFIX = "data:"


def _summarize_data_uri(value: str) -> str:
    media_type = value[len(_DATA_URI_PREFIX) :].split(",", 1)[0].split(";", 1)[0] or "text/plain"
    return f"<data-uri:{media_type}:{len(value)}b>"


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs.

    - Values under secret-looking keys become ``"<redacted>"``.
    - ``authData`` mappings keep their keys but every value is masked.
    - ``data:`` URIs are replaced by their media type and length.
    - Other strings longer than *max_string* are truncated.
    """
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if value.startswith(_DATA_URI_PREFIX) and "," in value:
            return _summarize_data_uri(value)
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            lowered = key.lower()
            if lowered in _SENSITIVE_VALUE_KEYS:
                redacted[key] = "<redacted>"
            elif lowered in _OPAQUE_AUTH_KEYS and isinstance(v, Mapping):
                redacted[key] = {str(auth_key): "<redacted>" for auth_key in v}
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    return repr(value)
