# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level client for calling server functions."""

from __future__ import annotations

from typing import Any

from .config import FetcherSettings, load_fetcher_settings
from .dispatcher import invoke
from .http.transport import Transport, create_default_transport
from .http.url import resolve_url
from .serializer import Serializer, start_serializer


class ServerFnClient:
    """
    Convenience wrapper that shares one transport across server function calls.

    When no transport is given an httpx transport is created from the settings
    and closed together with the client. Relative URLs are resolved against
    `settings.base_url`.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        *,
        settings: FetcherSettings | None = None,
        serializer: Serializer | None = None,
    ):
        self.settings = settings or load_fetcher_settings()
        self.serializer = serializer or start_serializer
        self._owns_transport = transport is None
        self.transport: Transport = transport or create_default_transport(self.settings)

    def resolve(self, url: str) -> str:
        return resolve_url(self.settings.base_url, url)

    async def call(self, url: str, *args: Any) -> Any:
        """Proxy positional arguments to a server function."""
        return await invoke(self.resolve(url), list(args), self.transport, serializer=self.serializer)

    async def call_server_fn(
        self,
        url: str,
        *,
        method: str = "POST",
        data: Any = None,
        context: Any = None,
        headers: Any = None,
    ) -> Any:
        """Issue a structured call carrying `data` and `context`."""
        descriptor = {"method": method, "data": data, "context": context, "headers": headers}
        return await invoke(self.resolve(url), [descriptor], self.transport, serializer=self.serializer)

    async def aclose(self) -> None:
        if not self._owns_transport:
            return
        aclose = getattr(self.transport, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> ServerFnClient:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


__all__ = ["ServerFnClient"]
