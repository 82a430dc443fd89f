# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport adapters."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from typing import Any, Union

from .models import HttpResponse, RequestOptions, RequestSpec

StubResult = Union[HttpResponse, Mapping[str, Any], BaseException]


class CallableTransport:
    """
    Adapter for a plain `(url, options)` callable, sync or async.

    Mapping results are normalized through `HttpResponse.from_mapping`.
    """

    def __init__(self, func: Callable[[str, RequestOptions], Any]):
        self._func = func

    async def __call__(self, url: str, options: RequestOptions) -> HttpResponse:
        result = self._func(url, options)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, HttpResponse):
            return result
        return HttpResponse.from_mapping(dict(result or {}))


class StubTransport:
    """Deterministic, programmable transport for tests."""

    def __init__(self, responses: dict[str, StubResult] | None = None, default: StubResult | None = None):
        self._responses = dict(responses or {})
        self._default = default
        self.requests: list[RequestSpec] = []

    def add(self, url: str, response: StubResult) -> None:
        self._responses[url] = response

    async def __call__(self, url: str, options: RequestOptions) -> HttpResponse:
        self.requests.append(RequestSpec(url=url, options=options))
        result = self._responses.get(url, self._default)
        if result is None:
            return HttpResponse(ok=False, status_code=404, headers={"content-type": "text/plain"}, content=b"No stubbed response configured")
        if isinstance(result, BaseException):
            raise result
        if isinstance(result, HttpResponse):
            return result
        return HttpResponse.from_mapping(result)

    async def aclose(self) -> None:
        return None


__all__ = ["CallableTransport", "StubTransport"]
