from __future__ import annotations

import json
import logging
import socket
from collections.abc import Iterator, Mapping
from typing import IO, Any

import requests
from requests.structures import CaseInsensitiveDict

from client.content_type import detect_content_type
from client.exceptions import HTTPError, JSONParseError, ReadError, RequestError
from client.streams import is_readable, read_stream
from client.version import USER_AGENT
from config.http_client_config import HttpClientConfig, resolve_http_client_config
from shared.models import JSONValue
from shared.sanitize import sanitize_headers

logger = logging.getLogger("LineBotHttp.HTTPClient")

READ_CHUNK_SIZE = 4096
NAME_RESOLUTION_MARKERS = (
    "Name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "Failed to resolve",
    "Temporary failure in name resolution",
)


def _iter_causes(exc: BaseException) -> Iterator[BaseException]:
    pending: list[BaseException] = [exc]
    seen: set[int] = set()
    while pending:
        current = pending.pop(0)
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        pending.extend(arg for arg in current.args if isinstance(arg, BaseException))
        reason = getattr(current, "reason", None)
        if isinstance(reason, BaseException):
            pending.append(reason)
        for linked in (current.__cause__, current.__context__):
            if linked is not None:
                pending.append(linked)


def error_code(exc: BaseException) -> str:
    """Map a transport failure onto a Node-style network error code."""
    if isinstance(exc, requests.Timeout):
        return "ETIMEDOUT"
    if isinstance(exc, requests.exceptions.SSLError):
        return "EPROTO"
    for cause in _iter_causes(exc):
        if isinstance(cause, socket.gaierror):
            return "ENOTFOUND"
        if isinstance(cause, ConnectionRefusedError):
            return "ECONNREFUSED"
        if isinstance(cause, ConnectionResetError):
            return "ECONNRESET"
        if isinstance(cause, TimeoutError):
            return "ETIMEDOUT"
    message = str(exc)
    if any(marker in message for marker in NAME_RESOLUTION_MARKERS):
        return "ENOTFOUND"
    return "ECONNERROR"


class HttpClient:
    def __init__(
        self,
        config: HttpClientConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or HttpClientConfig()
        self.session = session

    def get(self, url: str, headers: Mapping[str, str] | None = None) -> JSONValue:
        response = self._send("GET", url, headers)
        return self._read_json(response, "GET", url)

    def post(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        body: JSONValue | None = None,
    ) -> JSONValue:
        return self._send_json("POST", url, headers, body)

    def put(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        body: JSONValue | None = None,
    ) -> JSONValue:
        return self._send_json("PUT", url, headers, body)

    def delete(self, url: str, headers: Mapping[str, str] | None = None) -> JSONValue:
        response = self._send("DELETE", url, headers)
        return self._read_json(response, "DELETE", url)

    def stream(self, url: str, headers: Mapping[str, str] | None = None) -> IO[bytes]:
        """
        Open a GET request and hand back the raw body stream.
        The caller owns the stream and must close it.
        """
        response = self._send("GET", url, headers)
        raw = response.raw
        raw.decode_content = True
        return raw

    def post_binary(
        self,
        url: str,
        headers: Mapping[str, str] | None,
        data: bytes | bytearray | IO[bytes],
        content_type: str | None = None,
    ) -> JSONValue:
        if isinstance(data, (bytes, bytearray)):
            payload = bytes(data)
        elif is_readable(data):
            payload = read_stream(data)
        else:
            raise TypeError("invalid data type for post_binary")
        defaults = {"Content-Type": content_type or detect_content_type(payload)}
        response = self._send(
            "POST",
            url,
            headers,
            defaults=defaults,
            content_length=len(payload),
            data=payload,
        )
        return self._read_json(response, "POST", url)

    def _send_json(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None,
        body: JSONValue | None,
    ) -> JSONValue:
        if body is None:
            response = self._send(method, url, headers)
        else:
            encoded = json.dumps(body, ensure_ascii=False).encode("utf-8")
            response = self._send(
                method,
                url,
                headers,
                defaults={"Content-Type": "application/json"},
                data=encoded,
            )
        return self._read_json(response, method, url)

    def _build_headers(
        self,
        headers: Mapping[str, str] | None,
        defaults: Mapping[str, str] | None = None,
        content_length: int | None = None,
    ) -> dict[str, str]:
        merged: CaseInsensitiveDict[str] = CaseInsensitiveDict(defaults or {})
        merged.update(headers or {})
        merged["User-Agent"] = USER_AGENT
        if content_length is not None:
            merged["Content-Length"] = str(content_length)
        return dict(merged)

    def _send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None,
        *,
        defaults: Mapping[str, str] | None = None,
        content_length: int | None = None,
        **kwargs: Any,
    ) -> requests.Response:
        request_headers = self._build_headers(headers, defaults, content_length)
        requester = self.session.request if self.session is not None else requests.request
        try:
            response = requester(
                method=method,
                url=url,
                headers=request_headers,
                timeout=self.config.timeout,
                stream=True,
                **kwargs,
            )
        except requests.RequestException as exc:
            code = error_code(exc)
            logger.error(
                "HTTP %s request error for %s (%s): %s headers=%s",
                method,
                url,
                code,
                exc,
                sanitize_headers(request_headers),
            )
            raise RequestError(str(exc), code, exc) from exc

        status = response.status_code
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            status_message = response.reason or ""
            logger.error("HTTP %s %s failed with status %s %s", method, url, status, status_message)
            try:
                response_body = self._read_limited(response, limit=self.config.max_json_bytes)
            except ReadError as read_exc:
                logger.warning("HTTP %s %s error body unreadable: %s", method, url, read_exc)
                response_body = b""
            raise HTTPError(
                f"Request failed with status code {status}",
                status,
                status_message,
                exc,
                response_body=response_body,
            ) from exc
        logger.debug("HTTP %s %s -> %s", method, url, status)
        return response

    def _read_json(self, response: requests.Response, method: str, url: str) -> JSONValue:
        body_raw = self._read_limited(response, limit=self.config.max_json_bytes)
        if not body_raw.strip():
            return None
        try:
            body_str = body_raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.error("HTTP %s body is not valid UTF-8 for %s: %s", method, url, exc)
            raise JSONParseError(
                f"Failed to decode response body as UTF-8: {exc}",
                body_raw.decode("utf-8", errors="replace"),
            ) from exc
        try:
            parsed: JSONValue = json.loads(body_str)
        except json.JSONDecodeError as exc:
            logger.error("HTTP %s JSON decode error for %s: %s", method, url, exc)
            raise JSONParseError(f"Failed to parse response body as JSON: {exc}", body_str) from exc
        return parsed

    def _read_limited(self, response: requests.Response, limit: int) -> bytes:
        limit = min(limit, self.config.max_bytes)
        total = 0
        collected: list[bytes] = []
        try:
            for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE, decode_unicode=False):
                if not chunk:
                    continue
                total += len(chunk)
                if total > limit:
                    logger.error("HTTP response body exceeds %s bytes for %s", limit, response.url)
                    raise ReadError(ValueError(f"response body exceeds {limit} bytes"))
                collected.append(chunk)
        except requests.RequestException as exc:
            logger.error("HTTP read error for %s: %s", response.url, exc)
            raise ReadError(exc) from exc
        finally:
            response.close()
        return b"".join(collected)


_default_client: HttpClient | None = None


def default_client() -> HttpClient:
    global _default_client
    if _default_client is None:
        _default_client = HttpClient(resolve_http_client_config())
    return _default_client


def set_default_client(client: HttpClient | None) -> None:
    global _default_client
    _default_client = client


def get(url: str, headers: Mapping[str, str] | None = None) -> JSONValue:
    return default_client().get(url, headers)


def post(
    url: str,
    headers: Mapping[str, str] | None = None,
    body: JSONValue | None = None,
) -> JSONValue:
    return default_client().post(url, headers, body)


def put(
    url: str,
    headers: Mapping[str, str] | None = None,
    body: JSONValue | None = None,
) -> JSONValue:
    return default_client().put(url, headers, body)


def delete(url: str, headers: Mapping[str, str] | None = None) -> JSONValue:
    return default_client().delete(url, headers)


def stream(url: str, headers: Mapping[str, str] | None = None) -> IO[bytes]:
    return default_client().stream(url, headers)


def post_binary(
    url: str,
    headers: Mapping[str, str] | None,
    data: bytes | bytearray | IO[bytes],
    content_type: str | None = None,
) -> JSONValue:
    return default_client().post_binary(url, headers, data, content_type)


__all__ = [
    "HttpClient",
    "default_client",
    "delete",
    "error_code",
    "get",
    "post",
    "post_binary",
    "put",
    "set_default_client",
    "stream",
]
