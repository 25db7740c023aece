from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from client import http as http_module  # noqa: E402
from config.echo_server_config import EchoServerConfig  # noqa: E402
from server.echo.app import EchoServer  # noqa: E402

PROXY_ENV_VARS = (
    "HTTP_PROXY",
    "HTTPS_PROXY",
    "ALL_PROXY",
    "http_proxy",
    "https_proxy",
    "all_proxy",
)


@pytest.fixture(autouse=True)
def _no_proxy(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in PROXY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_default_client() -> Iterator[None]:
    http_module.set_default_client(None)
    yield
    http_module.set_default_client(None)


@pytest.fixture(scope="session")
def echo_server() -> Iterator[EchoServer]:
    server = EchoServer(EchoServerConfig(host="127.0.0.1", port=0))
    server.start()
    try:
        yield server
    finally:
        server.stop()


@pytest.fixture()
def test_url(echo_server: EchoServer) -> str:
    return echo_server.url
