from __future__ import annotations

import base64
import hashlib
import hmac

from client.exceptions import SignatureValidationFailed


def _to_bytes(value: str | bytes) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def compute_signature(body: str | bytes, channel_secret: str | bytes) -> str:
    digest = hmac.new(_to_bytes(channel_secret), _to_bytes(body), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def validate_signature(body: str | bytes, channel_secret: str | bytes, signature: str) -> bool:
    expected = compute_signature(body, channel_secret)
    return hmac.compare_digest(expected.encode("ascii"), _to_bytes(signature))


def ensure_signature(body: str | bytes, channel_secret: str | bytes, signature: str | None) -> None:
    if not signature:
        raise SignatureValidationFailed("no signature")
    if not validate_signature(body, channel_secret, signature):
        raise SignatureValidationFailed("signature validation failed", signature)
