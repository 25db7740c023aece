from __future__ import annotations

from collections.abc import Iterable
from typing import BinaryIO

DEFAULT_CHUNK_SIZE = 4096


def read_stream(stream: BinaryIO | Iterable[bytes], chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """Drain a binary stream (file-like or iterable of chunks) into bytes."""
    collected: list[bytes] = []
    read = getattr(stream, "read", None)
    if callable(read):
        while True:
            chunk = read(chunk_size)
            if not chunk:
                break
            collected.append(bytes(chunk))
        return b"".join(collected)
    for chunk in stream:
        if chunk is None:
            continue
        collected.append(bytes(chunk))
    return b"".join(collected)


def read_stream_text(
    stream: BinaryIO | Iterable[bytes],
    encoding: str = "utf-8",
) -> str:
    return read_stream(stream).decode(encoding, errors="replace")


def is_readable(value: object) -> bool:
    return callable(getattr(value, "read", None))
