# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Interpretation of server function responses."""

from __future__ import annotations

from typing import Any

from .errors import ServerFnResponseError
from .http.headers import ContentKind, response_content_kind
from .http.models import HttpResponse
from .serializer import Serializer
from .signals import as_control_signal


def raise_for_response(response: HttpResponse, serializer: Serializer) -> HttpResponse:
    """
    Raise when the server answered with a non-success status.

    JSON bodies are decoded first: a decoded exception or control signal is
    raised as-is, any other value is attached to a ServerFnResponseError as
    `payload`.
    """
    if response.ok:
        return response

    status = response.status_code
    if response_content_kind(response.headers) is ContentKind.JSON:
        decoded = serializer.decode(response.json())
        signal = as_control_signal(decoded)
        if signal is not None:
            raise signal
        if isinstance(decoded, BaseException):
            raise decoded
        message = decoded.get("message") if isinstance(decoded, dict) else None
        raise ServerFnResponseError(
            str(message or f"Server function failed with status {status}"),
            status_code=status,
            payload=decoded,
        )

    text = response.text
    raise ServerFnResponseError(text or f"Server function failed with status {status}", status_code=status, text=text)


def raise_if_signal(value: Any) -> Any:
    """Raise redirects, not-founds and error values; return anything else."""
    signal = as_control_signal(value)
    if signal is not None:
        raise signal
    if isinstance(value, BaseException):
        raise value
    return value


def normalize_structured_response(response: HttpResponse, serializer: Serializer) -> Any:
    """
    Turn a structured call's response into its result.

    JSON is decoded and checked for control signals; any other content type
    returns the response object untouched so the caller can read it freely.
    """
    raise_for_response(response, serializer)
    if response_content_kind(response.headers) is ContentKind.JSON:
        return raise_if_signal(serializer.decode(response.json()))
    return response


def normalize_positional_response(response: HttpResponse, serializer: Serializer) -> Any:
    """JSON responses are decoded, everything else is returned as text."""
    raise_for_response(response, serializer)
    if response_content_kind(response.headers) is ContentKind.JSON:
        return serializer.decode(response.json())
    return response.text


__all__ = [
    "normalize_positional_response",
    "normalize_structured_response",
    "raise_for_response",
    "raise_if_signal",
]
