# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
serverfn package entrypoint.

Client-side marshaling for server functions called over HTTP: call arguments
become a request (method, headers, body or query string) and the response
becomes a return value or a raised signal. The transport is injectable and
the default one is backed by httpx.
"""

from .binary import contains_binary
from .client import ServerFnClient
from .config import FetcherSettings, __version__, load_fetcher_settings
from .dispatcher import classify_call, invoke
from .errors import (
    BinaryInGetError,
    BinaryInObjectError,
    BinaryPayloadError,
    ErrorCategory,
    ServerError,
    ServerFnError,
    ServerFnResponseError,
)
from .forms import Blob, File, FormData
from .http import HttpResponse, HttpxTransport, RequestOptions, RequestSpec, StubTransport, Transport
from .log import setup_logging
from .payload import CallDescriptor, PayloadKind
from .serializer import Serializer, StartSerializer, start_serializer
from .signals import ControlSignal, NotFoundSignal, RedirectSignal

__all__ = [
    "BinaryInGetError",
    "BinaryInObjectError",
    "BinaryPayloadError",
    "Blob",
    "CallDescriptor",
    "ControlSignal",
    "ErrorCategory",
    "FetcherSettings",
    "File",
    "FormData",
    "HttpResponse",
    "HttpxTransport",
    "NotFoundSignal",
    "PayloadKind",
    "RedirectSignal",
    "RequestOptions",
    "RequestSpec",
    "Serializer",
    "ServerError",
    "ServerFnClient",
    "ServerFnError",
    "ServerFnResponseError",
    "StartSerializer",
    "StubTransport",
    "Transport",
    "__version__",
    "classify_call",
    "contains_binary",
    "invoke",
    "load_fetcher_settings",
    "setup_logging",
    "start_serializer",
]
