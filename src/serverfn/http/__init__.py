# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP layer: request/response models, header and URL helpers, transports."""

from .adapters import CallableTransport, StubTransport
from .headers import (
    JSON_CONTENT_TYPE,
    ContentKind,
    classify_content_type,
    header_value,
    merge_headers,
    normalize_headers,
    response_content_kind,
)
from .httpx_transport import HttpxTransport
from .models import BodyValue, Headers, HttpResponse, RequestOptions, RequestSpec
from .transport import Transport, create_default_transport
from .url import PAYLOAD_PARAM, SERVER_FN_MARKER, add_server_fn_marker, append_query, encode_payload_param, resolve_url

__all__ = [
    "BodyValue",
    "CallableTransport",
    "ContentKind",
    "Headers",
    "HttpResponse",
    "HttpxTransport",
    "JSON_CONTENT_TYPE",
    "PAYLOAD_PARAM",
    "RequestOptions",
    "RequestSpec",
    "SERVER_FN_MARKER",
    "StubTransport",
    "Transport",
    "add_server_fn_marker",
    "append_query",
    "classify_content_type",
    "create_default_transport",
    "encode_payload_param",
    "header_value",
    "merge_headers",
    "normalize_headers",
    "resolve_url",
    "response_content_kind",
]
