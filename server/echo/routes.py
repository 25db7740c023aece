from __future__ import annotations

from aiohttp import web

from server.echo import handlers


def register_routes(app: web.Application) -> None:
    app.router.add_get("/stream.txt", handlers.handle_stream_file)
    app.router.add_get("/text", handlers.handle_plain_text)
    app.router.add_get("/empty", handlers.handle_empty)
    app.router.add_route("*", "/404", handlers.handle_not_found)
    app.router.add_route("*", "/{tail:.*}", handlers.handle_echo)
