# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by the fetcher and transports."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from ..forms import FormData

Headers = dict[str, str]
BodyValue = Union[FormData, str, bytes]


@dataclass
class RequestOptions:
    """Everything a transport needs besides the URL."""

    method: str = "POST"
    headers: Headers = field(default_factory=dict)
    body: BodyValue | None = None


@dataclass
class RequestSpec:
    """Fully resolved request: target URL plus transport options."""

    url: str
    options: RequestOptions

    @property
    def method(self) -> str:
        return self.options.method

    @property
    def headers(self) -> Headers:
        return self.options.headers

    @property
    def body(self) -> BodyValue | None:
        return self.options.body


@dataclass
class HttpResponse:
    """Buffered HTTP response handed back by transports."""

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    content: bytes = b""
    url: str | None = None
    encoding: str = "utf-8"
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        try:
            return self.content.decode(self.encoding or "utf-8", errors="replace")
        except LookupError:
            return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.text)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> HttpResponse:
        """Helper to normalize dictionary-like responses (e.g. canned test fixtures)."""
        raw_headers: Any = data.get("headers") or {}
        headers: Headers = {}
        if isinstance(raw_headers, Mapping):
            for key, value in raw_headers.items():
                if key is None:
                    continue
                headers[str(key).lower()] = "" if value is None else str(value)

        status_code = data.get("status_code")
        raw_body = data.get("body")
        content: bytes = b""
        if isinstance(raw_body, (bytes, bytearray, memoryview)):
            content = bytes(raw_body)
        elif isinstance(raw_body, str):
            content = raw_body.encode("utf-8")
        elif raw_body is not None:
            content = json.dumps(raw_body).encode("utf-8")
            headers.setdefault("content-type", "application/json")

        ok = data.get("ok")
        if ok is None:
            ok = status_code is not None and 200 <= int(status_code) < 300

        return cls(
            ok=bool(ok),
            status_code=status_code,
            headers=headers,
            content=content,
            url=data.get("url"),
            meta={k: v for k, v in data.items() if k not in {"ok", "status_code", "headers", "body", "url"}},
        )


__all__ = ["BodyValue", "Headers", "HttpResponse", "RequestOptions", "RequestSpec"]
