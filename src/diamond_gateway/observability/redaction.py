"""Masking for secrets that can reach log events.

Keys naming a credential are masked outright. URL values keep their host and
path but lose embedded credentials: userinfo, key-like query parameters and
Infura-style project ids.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "secret",
        "token",
        "private_key",
        "api_key",
        "apikey",
        "authorization",
        "password",
        "mnemonic",
    }
)

REDACTED = "***REDACTED***"

_PROJECT_ID_SEGMENT = re.compile(r"/v3/[0-9a-fA-F]{32}")


def _is_sensitive_key(key: str) -> bool:
    normalized = key.lower()
    return any(sensitive in normalized for sensitive in SENSITIVE_KEYS)


def redact_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return url

    netloc = parts.netloc
    if "@" in netloc:
        netloc = f"{REDACTED}@{netloc.rsplit('@', 1)[1]}"
    query = urlencode(
        [
            (name, REDACTED if _is_sensitive_key(name) else value)
            for name, value in parse_qsl(parts.query, keep_blank_values=True)
        ],
        safe="*",
    )
    path = _PROJECT_ID_SEGMENT.sub(f"/v3/{REDACTED}", parts.path)
    return urlunsplit((parts.scheme, netloc, path, query, parts.fragment))


def _redact_value(value: Any) -> Any:
    if isinstance(value, str):
        if value.lower().startswith("bearer "):
            return REDACTED
        if "://" in value:
            return redact_url(value)
        return value
    return redact_sensitive(value)


def redact_sensitive(data: Any) -> Any:
    if isinstance(data, Mapping):
        return {
            key: REDACTED if _is_sensitive_key(str(key)) else _redact_value(value)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [_redact_value(item) for item in data]
    return data
