from __future__ import annotations


class LineBotHttpError(Exception):
    """Base class for errors raised by the HTTP helpers."""


class SignatureValidationFailed(LineBotHttpError):
    def __init__(self, message: str, signature: str | None = None) -> None:
        super().__init__(message)
        self.signature = signature


class JSONParseError(LineBotHttpError):
    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw = raw


class RequestError(LineBotHttpError):
    """No response arrived. `code` carries the low-level network error code."""

    def __init__(self, message: str, code: str, original_error: BaseException | None) -> None:
        super().__init__(message)
        self.code = code
        self.original_error = original_error


class ReadError(LineBotHttpError):
    """The response started but its body could not be read."""

    def __init__(self, original_error: BaseException) -> None:
        super().__init__(str(original_error))
        self.original_error = original_error


class HTTPError(LineBotHttpError):
    def __init__(
        self,
        message: str,
        status_code: int,
        status_message: str,
        original_error: BaseException | None,
        response_body: bytes = b"",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status_message = status_message
        self.original_error = original_error
        self.response_body = response_body
