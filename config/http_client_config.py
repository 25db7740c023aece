from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_TIMEOUT = 15
DEFAULT_MAX_BYTES = 10_000_000
DEFAULT_MAX_JSON_BYTES = 1_000_000
DEFAULT_PATH = Path("config/http_client.json")


@dataclass(frozen=True)
class HttpClientConfig:
    timeout: int = DEFAULT_TIMEOUT
    max_bytes: int = DEFAULT_MAX_BYTES
    max_json_bytes: int = DEFAULT_MAX_JSON_BYTES

    def to_dict(self) -> dict[str, object]:
        return {
            "timeout": self.timeout,
            "max_bytes": self.max_bytes,
            "max_json_bytes": self.max_json_bytes,
        }


def load_http_client_config(path: Path = DEFAULT_PATH) -> HttpClientConfig:
    if not path.exists():
        return HttpClientConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise RuntimeError(f"Failed to read http_client.json: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("http_client.json must contain an object.")
    timeout = data.get("timeout", DEFAULT_TIMEOUT)
    max_bytes = data.get("max_bytes", DEFAULT_MAX_BYTES)
    max_json_bytes = data.get("max_json_bytes", DEFAULT_MAX_JSON_BYTES)
    for name, value in (
        ("timeout", timeout),
        ("max_bytes", max_bytes),
        ("max_json_bytes", max_json_bytes),
    ):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"http_client.{name} must be int.")
        if value <= 0:
            raise ValueError(f"http_client.{name} must be positive.")
    return HttpClientConfig(timeout=timeout, max_bytes=max_bytes, max_json_bytes=max_json_bytes)


def _env_int(name: str, fallback: int) -> int:
    raw = os.getenv(name)
    if not isinstance(raw, str) or not raw.strip():
        return fallback
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be int.") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive.")
    return value


def resolve_http_client_config(path: Path = DEFAULT_PATH) -> HttpClientConfig:
    config = load_http_client_config(path)
    return HttpClientConfig(
        timeout=_env_int("LINEBOT_HTTP_TIMEOUT", config.timeout),
        max_bytes=_env_int("LINEBOT_HTTP_MAX_BYTES", config.max_bytes),
        max_json_bytes=_env_int("LINEBOT_HTTP_MAX_JSON_BYTES", config.max_json_bytes),
    )
