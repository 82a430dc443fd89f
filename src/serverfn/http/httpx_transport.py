# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed transport."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import FetcherSettings, load_fetcher_settings
from ..forms import FormData
from .models import HttpResponse, RequestOptions

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Asynchronous httpx transport. Errors raised by httpx propagate to the caller."""

    def __init__(self, settings: FetcherSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_fetcher_settings()
        self._client = client or httpx.AsyncClient(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def _request_kwargs(self, options: RequestOptions) -> dict[str, Any]:
        headers = dict(options.headers or {})
        if not any(key.lower() == "user-agent" for key in headers):
            headers["User-Agent"] = self.settings.user_agent

        kwargs: dict[str, Any] = {"headers": headers}
        body = options.body
        if isinstance(body, FormData):
            data, files = body.to_httpx()
            kwargs["data"] = data
            if files:
                kwargs["files"] = files
        elif body is not None:
            kwargs["content"] = body
        return kwargs

    async def __call__(self, url: str, options: RequestOptions) -> HttpResponse:
        logger.debug("%s %s", options.method, url)
        resp = await self._client.request(options.method, url, **self._request_kwargs(options))
        logger.debug("%s %s -> %s", options.method, url, resp.status_code)
        return HttpResponse(
            ok=resp.is_success,
            status_code=resp.status_code,
            headers={key.lower(): value for key, value in resp.headers.items()},
            content=resp.content,
            url=str(resp.url),
            encoding=resp.encoding or "utf-8",
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


__all__ = ["HttpxTransport"]
