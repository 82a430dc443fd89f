# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization and content type helpers."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

JSON_CONTENT_TYPE = "application/json"


class ContentKind(str, Enum):
    JSON = "json"
    TEXT = "text"
    OPAQUE = "opaque"


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """
    Best-effort coercion of "dict-like" header containers into a Mapping.

    Accepts plain dicts, httpx.Headers, objects exposing `.items()` and
    iterables of pairs (e.g. list[tuple[str, str]]).
    """
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        return dict(items())

    return dict(headers)


def normalize_headers(headers: Any) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return {}
    out: dict[str, str] = {}
    for key, value in coerced.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def merge_headers(base: Mapping[str, str] | None, overrides: Any) -> dict[str, str]:
    """Merge `overrides` on top of `base`; later keys win case-insensitively."""
    merged = normalize_headers(base)
    merged.update(normalize_headers(overrides))
    return merged


def header_value(headers: Any, name: str, default: str = "") -> str:
    """
    Return a header value using case-insensitive key matching.

    Fast-paths common key casings before falling back to a full scan.
    """
    if not headers or not name:
        return default

    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return default

    lower = str(name).lower()
    for key in (name, lower, lower.title()):
        if key in coerced:
            value = coerced.get(key)
            return default if value is None else str(value).strip()

    for key, value in coerced.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


def classify_content_type(content_type: str | None) -> ContentKind:
    value = (content_type or "").strip().lower()
    if JSON_CONTENT_TYPE in value:
        return ContentKind.JSON
    if value.startswith("text/"):
        return ContentKind.TEXT
    return ContentKind.OPAQUE


def response_content_kind(headers: Any) -> ContentKind:
    return classify_content_type(header_value(headers, "content-type"))


__all__ = [
    "ContentKind",
    "JSON_CONTENT_TYPE",
    "classify_content_type",
    "header_value",
    "merge_headers",
    "normalize_headers",
    "response_content_kind",
]
