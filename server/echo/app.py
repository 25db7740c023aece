from __future__ import annotations

import asyncio
import logging
import threading
from types import TracebackType

from aiohttp import web

from config.echo_server_config import EchoServerConfig, resolve_echo_server_config
from server.echo.routes import register_routes

logger = logging.getLogger("LineBotHttp.EchoServer")

MAX_REQUEST_BYTES = 10_000_000
START_TIMEOUT_SECONDS = 10.0


def create_app(*, max_request_bytes: int = MAX_REQUEST_BYTES) -> web.Application:
    app = web.Application(client_max_size=max_request_bytes)
    register_routes(app)
    return app


class EchoServer:
    """
    Runs the echo app on its own event loop in a background thread,
    so synchronous clients can talk to it. Port 0 binds a free port.
    """

    def __init__(self, config: EchoServerConfig | None = None) -> None:
        self.config = config or EchoServerConfig()
        self.port: int | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._runner: web.AppRunner | None = None
        self._thread: threading.Thread | None = None
        self._started = threading.Event()
        self._startup_error: BaseException | None = None

    @property
    def url(self) -> str:
        if self.port is None:
            raise RuntimeError("Echo server is not running.")
        return f"http://{self.config.host}:{self.port}"

    def start(self) -> EchoServer:
        if self._thread is not None:
            raise RuntimeError("Echo server already started.")
        self._started = threading.Event()
        self._startup_error = None
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run, name="echo-server", daemon=True)
        self._thread.start()
        if not self._started.wait(timeout=START_TIMEOUT_SECONDS):
            raise RuntimeError("Echo server did not start in time.")
        if self._startup_error is not None:
            raise RuntimeError(
                f"Echo server failed to start: {self._startup_error}"
            ) from self._startup_error
        logger.info("Echo server listening on %s", self.url)
        return self

    def stop(self) -> None:
        loop = self._loop
        thread = self._thread
        if loop is None or thread is None:
            return
        if not loop.is_closed():
            loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout=START_TIMEOUT_SECONDS)
        if thread.is_alive():
            raise RuntimeError("Echo server thread did not exit.")
        self._thread = None
        self._loop = None
        self.port = None
        logger.info("Echo server stopped")

    def __enter__(self) -> EchoServer:
        return self.start()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    def _run(self) -> None:
        loop = self._loop
        if loop is None:
            raise RuntimeError("Echo server loop is not initialised.")
        asyncio.set_event_loop(loop)
        try:
            loop.run_until_complete(self._setup())
        except Exception as exc:  # noqa: BLE001
            logger.error("Echo server startup error: %s", exc)
            self._startup_error = exc
            self._mark_started()
            loop.close()
            return
        self._mark_started()
        try:
            loop.run_forever()
        finally:
            if self._runner is not None:
                loop.run_until_complete(self._runner.cleanup())
            loop.close()

    def _mark_started(self) -> None:
        self._started.set()

    async def _setup(self) -> None:
        self._runner = web.AppRunner(create_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.config.host, self.config.port)
        await site.start()
        address = self._runner.addresses[0]
        self.port = int(address[1])


def run_server(config: EchoServerConfig) -> None:
    web.run_app(create_app(), host=config.host, port=config.port or 8080)


def main() -> None:
    config = resolve_echo_server_config()
    run_server(config)


__all__ = ["EchoServer", "create_app", "main", "run_server"]
