from __future__ import annotations

from collections.abc import Mapping

SECRET_HEADERS = {
    "authorization",
    "proxy-authorization",
    "x-line-signature",
    "x-api-key",
    "cookie",
}
MAX_FIELD_PREVIEW = 256


def _mask_value(value: str) -> str:
    return "[secret]"


def _truncate(value: str) -> str:
    if len(value) <= MAX_FIELD_PREVIEW:
        return value
    return value[:MAX_FIELD_PREVIEW] + "…[truncated]"


def sanitize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Copy of request headers that is safe to log."""
    if not headers:
        return {}
    sanitized: dict[str, str] = {}
    for key, value in headers.items():
        text = value.decode("latin-1") if isinstance(value, bytes) else str(value)
        if key.lower() in SECRET_HEADERS:
            sanitized[key] = _mask_value(text)
        else:
            sanitized[key] = _truncate(text)
    return sanitized
