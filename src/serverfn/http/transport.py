# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction and factory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from ..config import FetcherSettings, load_fetcher_settings
from .models import HttpResponse, RequestOptions

if TYPE_CHECKING:
    from .httpx_transport import HttpxTransport


class Transport(Protocol):
    """Async callable that sends one request and returns a buffered response."""

    async def __call__(self, url: str, options: RequestOptions) -> HttpResponse: ...


def create_default_transport(settings: FetcherSettings | None = None) -> HttpxTransport:
    """Factory for the default httpx-backed transport."""
    from .httpx_transport import HttpxTransport

    return HttpxTransport(settings or load_fetcher_settings())


__all__ = ["Transport", "create_default_transport"]
