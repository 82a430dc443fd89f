# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Router control signals carried in server function responses.

A server function may answer with a redirect or a not-found marker instead of
data. Both arrive as JSON mappings flagged with `isRedirect` / `isNotFound`
and are revived into exceptions so a routing layer can catch them.
"""

from collections.abc import Mapping
from typing import Any

REDIRECT_FLAG = "isRedirect"
NOT_FOUND_FLAG = "isNotFound"


class ControlSignal(Exception):
    """Base for decoded values that must be raised rather than returned."""

    def __init__(self, options: Mapping[str, Any] | None = None):
        self.options: dict[str, Any] = dict(options or {})
        super().__init__(self._describe())

    def _describe(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        return dict(self.options)


class RedirectSignal(ControlSignal):
    """Redirect requested by the server function."""

    @property
    def to(self) -> str | None:
        return self.options.get("to") or self.options.get("href")

    @property
    def status_code(self) -> int:
        return int(self.options.get("statusCode") or 307)

    def _describe(self) -> str:
        return f"Redirect to {self.to}" if self.to else "Redirect"

    def to_dict(self) -> dict[str, Any]:
        return {**self.options, REDIRECT_FLAG: True}


class NotFoundSignal(ControlSignal):
    """Not-found raised by the server function."""

    @property
    def route_id(self) -> str | None:
        return self.options.get("routeId")

    def _describe(self) -> str:
        return f"Not found ({self.route_id})" if self.route_id else "Not found"

    def to_dict(self) -> dict[str, Any]:
        return {**self.options, NOT_FOUND_FLAG: True}


def is_redirect(value: Any) -> bool:
    if isinstance(value, RedirectSignal):
        return True
    return isinstance(value, Mapping) and bool(value.get(REDIRECT_FLAG))


def is_not_found(value: Any) -> bool:
    if isinstance(value, NotFoundSignal):
        return True
    return isinstance(value, Mapping) and bool(value.get(NOT_FOUND_FLAG))


def as_control_signal(value: Any) -> ControlSignal | None:
    """Return the signal a decoded value represents, or None for plain data."""
    if isinstance(value, ControlSignal):
        return value
    if is_redirect(value):
        return RedirectSignal({k: v for k, v in value.items() if k != REDIRECT_FLAG})
    if is_not_found(value):
        return NotFoundSignal({k: v for k, v in value.items() if k != NOT_FOUND_FLAG})
    return None


__all__ = [
    "ControlSignal",
    "NOT_FOUND_FLAG",
    "NotFoundSignal",
    "REDIRECT_FLAG",
    "RedirectSignal",
    "as_control_signal",
    "is_not_found",
    "is_redirect",
]
