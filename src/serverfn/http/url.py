# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers for server function endpoints."""

from urllib.parse import urlencode, urljoin, urlsplit

SERVER_FN_MARKER = "createServerFn"
PAYLOAD_PARAM = "payload"


def append_query(url: str, fragment: str) -> str:
    """
    Append a raw query fragment to `url`.

    Uses `&` when the URL already has a `?`, otherwise starts the query string.
    Empty fragments leave the URL unchanged.
    """
    if not fragment:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{fragment}"


def encode_payload_param(serialized: str) -> str:
    """Encode a serialized payload as the single `payload=` query parameter."""
    return urlencode({PAYLOAD_PARAM: serialized})


def add_server_fn_marker(url: str) -> str:
    return append_query(url, SERVER_FN_MARKER)


def resolve_url(base_url: str, url: str) -> str:
    """
    Resolve a server function URL against an optional base URL.

    Absolute URLs and an empty base are returned as-is.
    """
    if not base_url or urlsplit(url).scheme:
        return url
    return urljoin(base_url, url)


__all__ = [
    "PAYLOAD_PARAM",
    "SERVER_FN_MARKER",
    "add_server_fn_marker",
    "append_query",
    "encode_payload_param",
    "resolve_url",
]
