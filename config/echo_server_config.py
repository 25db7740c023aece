from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 0
DEFAULT_PATH = Path("config/echo_server.json")


@dataclass(frozen=True)
class EchoServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    def to_dict(self) -> dict[str, object]:
        return {"host": self.host, "port": self.port}


def load_echo_server_config(path: Path = DEFAULT_PATH) -> EchoServerConfig:
    if not path.exists():
        return EchoServerConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise RuntimeError(f"Failed to read echo_server.json: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("echo_server.json must contain an object.")
    host = data.get("host", DEFAULT_HOST)
    port = data.get("port", DEFAULT_PORT)
    if not isinstance(host, str) or not host.strip():
        raise ValueError("echo_server.host must be a non-empty string.")
    if isinstance(port, bool) or not isinstance(port, int):
        raise ValueError("echo_server.port must be int.")
    return EchoServerConfig(host=host.strip(), port=port)


def resolve_echo_server_config(path: Path = DEFAULT_PATH) -> EchoServerConfig:
    config = load_echo_server_config(path)
    host_raw = os.getenv("LINEBOT_ECHO_HOST")
    port_raw = os.getenv("TEST_PORT")

    host = config.host
    if isinstance(host_raw, str) and host_raw.strip():
        host = host_raw.strip()

    port = config.port
    if isinstance(port_raw, str) and port_raw.strip():
        try:
            port = int(port_raw.strip())
        except ValueError as exc:
            raise ValueError("TEST_PORT must be int.") from exc

    return EchoServerConfig(host=host, port=port)
