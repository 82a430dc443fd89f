# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from enum import Enum
from typing import Any


class ServerFnError(Exception):
    """Base class for errors raised by the server function fetcher."""


class BinaryPayloadError(ServerFnError, ValueError):
    """Binary content found somewhere it cannot be encoded."""


class BinaryInGetError(BinaryPayloadError):
    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "Cannot send binary data to a GET server function. "
            "Please set the method of the server function to POST instead."
        )


class BinaryInObjectError(BinaryPayloadError):
    def __init__(self, message: str | None = None):
        super().__init__(message or "Binary data cannot be sent within objects. Use FormData instead.")


class ServerFnResponseError(ServerFnError):
    """
    Non-success HTTP status returned by the server.

    `payload` holds the decoded JSON body when the server answered with JSON,
    otherwise `None`; `text` always holds the raw body when it was read as text.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        payload: Any = None,
        text: str = "",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload
        self.text = text


class ServerError(ServerFnError):
    """Error value serialized by the server and revived on the client."""

    def __init__(self, message: str = "", **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = dict(extra)

    def __getattr__(self, name: str) -> Any:
        extra = self.__dict__.get("extra") or {}
        if name in extra:
            return extra[name]
        raise AttributeError(name)

    def to_dict(self) -> dict[str, Any]:
        return {**self.extra, "message": self.message}


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    SSL_ERROR = "SSL_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    PAYLOAD_ERROR = "PAYLOAD_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx/serverfn exceptions to ErrorCategory.
    """
    import ssl as ssl_module

    import httpx

    if isinstance(exc, BinaryPayloadError):
        return ErrorCategory.PAYLOAD_ERROR

    if isinstance(exc, ServerFnResponseError):
        return ErrorCategory.HTTP_ERROR

    if isinstance(exc, ServerError):
        return ErrorCategory.SERVER_ERROR

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout while calling server function",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.HTTP_ERROR: "Server function returned an error status",
        ErrorCategory.PAYLOAD_ERROR: "Arguments cannot be encoded for this call",
        ErrorCategory.SERVER_ERROR: "Server function raised an error",
        ErrorCategory.UNKNOWN_ERROR: "Server function call failed",
        None: "",
    }
    return mapping.get(category, "Server function call failed")


__all__ = [
    "BinaryInGetError",
    "BinaryInObjectError",
    "BinaryPayloadError",
    "ErrorCategory",
    "ServerError",
    "ServerFnError",
    "ServerFnResponseError",
    "categorize_exception",
    "error_category_to_reason",
]
