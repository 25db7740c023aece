from __future__ import annotations

import io
import json
from pathlib import Path

import pytest
import requests
from PIL import Image

from client.exceptions import HTTPError, JSONParseError, RequestError
from client.http import HttpClient, delete, get, post, post_binary, put, stream
from client.streams import read_stream_text
from client.version import PACKAGE_NAME, PACKAGE_VERSION

TEST_HEADERS = {"test-header-key": "Test-Header-Value"}
EXPECTED_USER_AGENT = f"{PACKAGE_NAME}/{PACKAGE_VERSION}"


@pytest.fixture()
def png_path(tmp_path: Path) -> Path:
    path = tmp_path / "icon.png"
    Image.new("RGB", (8, 8), (0, 185, 0)).save(path, format="PNG")
    return path


def test_get(test_url: str) -> None:
    res = get(f"{test_url}/get?x=10", TEST_HEADERS)
    assert res["method"] == "GET"
    assert res["path"] == "/get"
    assert res["query"]["x"] == "10"
    assert res["headers"]["test-header-key"] == TEST_HEADERS["test-header-key"]
    assert res["headers"]["user-agent"] == EXPECTED_USER_AGENT


def test_post_without_body(test_url: str) -> None:
    res = post(f"{test_url}/post", TEST_HEADERS)
    assert res["method"] == "POST"
    assert res["path"] == "/post"
    assert "body" not in res
    assert res["headers"]["test-header-key"] == TEST_HEADERS["test-header-key"]
    assert res["headers"]["user-agent"] == EXPECTED_USER_AGENT


def test_post_with_body(test_url: str) -> None:
    test_body = {"id": 12345, "message": "hello, body!"}
    res = post(f"{test_url}/post/body", TEST_HEADERS, test_body)
    assert res["method"] == "POST"
    assert res["path"] == "/post/body"
    assert res["headers"]["test-header-key"] == TEST_HEADERS["test-header-key"]
    assert res["headers"]["user-agent"] == EXPECTED_USER_AGENT
    assert res["body"] == test_body


def test_put_with_body(test_url: str) -> None:
    test_body = {"items": [1, 2, 3]}
    res = put(f"{test_url}/put", TEST_HEADERS, test_body)
    assert res["method"] == "PUT"
    assert res["body"] == test_body


def test_stream(test_url: str) -> None:
    body = stream(f"{test_url}/stream.txt", TEST_HEADERS)
    try:
        result = read_stream_text(body)
    finally:
        body.close()
    assert result == "hello, stream!\n"


def test_delete(test_url: str) -> None:
    res = delete(f"{test_url}/delete", TEST_HEADERS)
    assert res["method"] == "DELETE"
    assert res["path"] == "/delete"
    assert res["headers"]["test-header-key"] == TEST_HEADERS["test-header-key"]
    assert res["headers"]["user-agent"] == EXPECTED_USER_AGENT


def test_post_binary(test_url: str, png_path: Path) -> None:
    buffer = png_path.read_bytes()
    res = post_binary(f"{test_url}/post", TEST_HEADERS, buffer)
    assert res["method"] == "POST"
    assert res["path"] == "/post"
    assert res["headers"]["test-header-key"] == TEST_HEADERS["test-header-key"]
    assert res["headers"]["user-agent"] == EXPECTED_USER_AGENT
    assert res["headers"]["content-type"] == "image/png"
    assert res["headers"]["content-length"] == str(len(buffer))
    assert res["body"] == {"content_type": "image/png", "length": len(buffer)}


def test_post_binary_from_stream_with_explicit_type(test_url: str) -> None:
    res = post_binary(
        f"{test_url}/upload",
        TEST_HEADERS,
        io.BytesIO(b"plain bytes"),
        content_type="text/plain",
    )
    assert res["headers"]["content-type"] == "text/plain"
    assert res["body"]["length"] == len(b"plain bytes")


def test_post_binary_rejects_unsupported_data(test_url: str) -> None:
    with pytest.raises(TypeError):
        post_binary(f"{test_url}/post", TEST_HEADERS, "not bytes")  # type: ignore[arg-type]


def test_fail_with_404(test_url: str) -> None:
    with pytest.raises(HTTPError) as exc_info:
        get(f"{test_url}/404", {})
    assert exc_info.value.status_code == 404
    assert exc_info.value.status_message == "Not Found"
    error_payload = json.loads(exc_info.value.response_body)
    assert error_payload["error"]["code"] == "not_found"


def test_fail_with_wrong_addr() -> None:
    with pytest.raises(RequestError) as exc_info:
        get("http://domain.invalid", {})
    assert exc_info.value.code == "ENOTFOUND"


def test_fail_with_refused_connection() -> None:
    with pytest.raises(RequestError) as exc_info:
        get("http://127.0.0.1:1/refused", {})
    assert exc_info.value.code == "ECONNREFUSED"


def test_non_json_body_raises_parse_error(test_url: str) -> None:
    with pytest.raises(JSONParseError) as exc_info:
        get(f"{test_url}/text", {})
    assert exc_info.value.raw == "this is not json\n"


def test_empty_body_returns_none(test_url: str) -> None:
    assert get(f"{test_url}/empty", {}) is None


def test_client_instance_uses_session(test_url: str) -> None:
    with requests.Session() as session:
        session.trust_env = False
        client = HttpClient(session=session)
        res = client.get(f"{test_url}/session", {"X-Trace": "abc"})
    assert res["headers"]["x-trace"] == "abc"
