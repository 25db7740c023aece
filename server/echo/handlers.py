from __future__ import annotations

import json
import logging
from pathlib import Path

from aiohttp import web

from server.echo.responses import error_response, json_response
from shared.models import JSONValue

logger = logging.getLogger("LineBotHttp.EchoServer")

STATIC_ROOT = Path(__file__).resolve().parent / "static"
PLAIN_TEXT = "this is not json\n"


def _echo_headers(request: web.Request) -> dict[str, JSONValue]:
    return {key.lower(): value for key, value in request.headers.items()}


def _decode_body(content_type: str, raw: bytes) -> JSONValue:
    if content_type == "application/json":
        return json.loads(raw.decode("utf-8"))
    return {"content_type": content_type, "length": len(raw)}


async def handle_echo(request: web.Request) -> web.Response:
    payload: dict[str, JSONValue] = {
        "method": request.method,
        "path": request.path,
        "query": dict(request.query),
        "headers": _echo_headers(request),
    }
    if request.can_read_body:
        raw = await request.read()
        if raw:
            try:
                payload["body"] = _decode_body(request.content_type, raw)
            except (UnicodeDecodeError, json.JSONDecodeError) as exc:
                logger.warning("Echo body decode failed for %s %s: %s", request.method, request.path, exc)
                return error_response(
                    status=400,
                    message=f"Invalid JSON body: {exc}",
                    code="invalid_body",
                )
    logger.debug("Echo %s %s", request.method, request.path)
    return json_response(payload)


async def handle_stream_file(request: web.Request) -> web.StreamResponse:
    return web.FileResponse(STATIC_ROOT / "stream.txt")


async def handle_plain_text(request: web.Request) -> web.Response:
    return web.Response(text=PLAIN_TEXT, content_type="text/plain")


async def handle_empty(request: web.Request) -> web.Response:
    return web.Response(status=204)


async def handle_not_found(request: web.Request) -> web.Response:
    return error_response(status=404, message="Not Found", code="not_found")
