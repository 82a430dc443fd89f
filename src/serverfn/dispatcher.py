# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Invocation dispatcher for server function calls.

A call arrives either as a structured descriptor (`{"method", "data",
"context", "headers"}` as the first argument) or as plain positional
arguments. The shape is decided once, then each shape has its own request
builder; both share the response normalizer.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from .binary import contains_binary
from .errors import BinaryInGetError, BinaryInObjectError
from .http.headers import JSON_CONTENT_TYPE, merge_headers
from .http.models import RequestOptions, RequestSpec
from .http.transport import Transport
from .http.url import add_server_fn_marker
from .payload import CallDescriptor, PayloadKind, build_body, build_query
from .response import normalize_positional_response, normalize_structured_response
from .serializer import Serializer, start_serializer

logger = logging.getLogger(__name__)

POSITIONAL_HEADERS = {"Accept": JSON_CONTENT_TYPE, "Content-Type": JSON_CONTENT_TYPE}


@dataclass(frozen=True)
class StructuredCall:
    descriptor: CallDescriptor


@dataclass(frozen=True)
class PositionalCall:
    args: tuple[Any, ...]


CallShape = Union[StructuredCall, PositionalCall]


def classify_call(args: Sequence[Any]) -> CallShape:
    """Structured when the first argument is a mapping with a `method`; positional otherwise."""
    if not args:
        raise ValueError("Server function calls require at least one argument")
    first = args[0]
    if isinstance(first, Mapping) and first.get("method"):
        descriptor = CallDescriptor(
            method=str(first["method"]).upper(),
            data=first.get("data"),
            context=first.get("context"),
            headers=first.get("headers"),
        )
        return StructuredCall(descriptor)
    return PositionalCall(tuple(args))


def build_structured_request(url: str, descriptor: CallDescriptor, serializer: Serializer) -> RequestSpec:
    """
    Resolve a structured call into a request.

    Raises BinaryInGetError / BinaryInObjectError before anything is sent
    when binary data cannot travel in the chosen encoding.
    """
    kind = descriptor.payload_kind
    defaults = {"content-type": JSON_CONTENT_TYPE, "accept": JSON_CONTENT_TYPE} if kind is PayloadKind.OBJECT else {}
    headers = merge_headers(defaults, descriptor.headers)

    if descriptor.is_get:
        if contains_binary(descriptor.data):
            raise BinaryInGetError()
        url = build_query(url, descriptor, serializer)
    elif kind is PayloadKind.OBJECT and contains_binary(descriptor.data):
        raise BinaryInObjectError()

    url = add_server_fn_marker(url)
    body = build_body(descriptor, serializer)
    return RequestSpec(url=url, options=RequestOptions(method=descriptor.method, headers=headers, body=body))


def build_positional_request(url: str, args: Sequence[Any]) -> RequestSpec:
    """Positional arguments are proxied as a JSON array in a POST body."""
    return RequestSpec(
        url=url,
        options=RequestOptions(method="POST", headers=dict(POSITIONAL_HEADERS), body=json.dumps(list(args))),
    )


async def invoke_structured(
    url: str,
    descriptor: CallDescriptor,
    transport: Transport,
    *,
    serializer: Serializer = start_serializer,
) -> Any:
    request = build_structured_request(url, descriptor, serializer)
    logger.debug("structured call %s %s (%s)", request.method, request.url, descriptor.payload_kind.value)
    response = await transport(request.url, request.options)
    return normalize_structured_response(response, serializer)


async def invoke_positional(
    url: str,
    args: Sequence[Any],
    transport: Transport,
    *,
    serializer: Serializer = start_serializer,
) -> Any:
    request = build_positional_request(url, args)
    logger.debug("positional call POST %s (%d args)", request.url, len(args))
    response = await transport(request.url, request.options)
    return normalize_positional_response(response, serializer)


async def invoke(
    url: str,
    args: Sequence[Any],
    transport: Transport,
    *,
    serializer: Serializer | None = None,
) -> Any:
    """
    Call a server function at `url` and return its decoded result.

    Structured calls may also return the raw HttpResponse for non-JSON
    content. Redirects, not-founds and error values in the response are
    raised. Nothing is retried.
    """
    serializer = serializer or start_serializer
    shape = classify_call(args)
    if isinstance(shape, StructuredCall):
        return await invoke_structured(url, shape.descriptor, transport, serializer=serializer)
    return await invoke_positional(url, shape.args, transport, serializer=serializer)


__all__ = [
    "CallShape",
    "POSITIONAL_HEADERS",
    "PositionalCall",
    "StructuredCall",
    "build_positional_request",
    "build_structured_request",
    "classify_call",
    "invoke",
    "invoke_positional",
    "invoke_structured",
]
