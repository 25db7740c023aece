from __future__ import annotations

from shared.sanitize import sanitize_headers


def test_sanitize_headers_masks_secrets() -> None:
    headers = {
        "Authorization": "Bearer token",
        "X-Line-Signature": "abc",
        "test-header-key": "Test-Header-Value",
    }
    sanitized = sanitize_headers(headers)
    assert sanitized["Authorization"] == "[secret]"
    assert sanitized["X-Line-Signature"] == "[secret]"
    assert sanitized["test-header-key"] == "Test-Header-Value"
    assert headers["Authorization"] == "Bearer token"


def test_sanitize_headers_truncates_long_values() -> None:
    sanitized = sanitize_headers({"X-Long": "x" * 600})
    assert sanitized["X-Long"].endswith("…[truncated]")
    assert len(sanitized["X-Long"]) < 600


def test_sanitize_headers_empty() -> None:
    assert sanitize_headers(None) == {}
