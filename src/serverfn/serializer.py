# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Wire serializer for server function payloads.

Rich values that JSON cannot carry are written as single-key tagged mappings,
e.g. `{"$date": "2025-01-01T00:00:00.000Z"}`. Decoding walks a parsed JSON
tree and revives any mapping carrying a known tag.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Protocol

from .errors import ServerError
from .forms import Blob, FormData

MAX_SAFE_INTEGER = 2**53 - 1


class Serializer(Protocol):
    """Minimal protocol for payload serializers."""

    def stringify(self, value: Any) -> str: ...

    def parse(self, text: str) -> Any: ...

    def encode(self, value: Any) -> Any: ...

    def decode(self, value: Any) -> Any: ...


@dataclass(frozen=True)
class Transformer:
    """Round-trip rule for one tagged value type."""

    key: str
    check: Callable[[Any], bool]
    to_value: Callable[[Any], Any]
    from_value: Callable[[Any], Any]

    @property
    def tag(self) -> str:
        return f"${self.key}"


def _format_date(value: datetime) -> str:
    timespec = "milliseconds" if value.microsecond % 1000 == 0 else "microseconds"
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
        return value.isoformat(timespec=timespec).replace("+00:00", "Z")
    # Naive datetimes travel without an offset and come back naive.
    return value.isoformat(timespec=timespec)


def _parse_date(value: Any) -> datetime:
    raw = str(value)
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    return datetime.fromisoformat(raw)


def _error_to_value(exc: BaseException) -> dict[str, Any]:
    if isinstance(exc, ServerError):
        return exc.to_dict()
    return {"message": str(exc), "name": type(exc).__name__}


def _error_from_value(value: Any) -> ServerError:
    if not isinstance(value, Mapping):
        return ServerError(str(value))
    extra = {str(k): v for k, v in value.items() if k != "message"}
    return ServerError(str(value.get("message") or ""), **extra)


def _form_to_value(form: FormData) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for name, value in form.items():
        # Binary parts cannot be represented in JSON; only text entries travel.
        if isinstance(value, Blob):
            continue
        out[name] = value
    return out


def _form_from_value(value: Any) -> FormData:
    if not isinstance(value, Mapping):
        return FormData()
    return FormData({str(k): v for k, v in value.items()})


def _is_bigint(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and abs(value) > MAX_SAFE_INTEGER


DEFAULT_TRANSFORMERS: tuple[Transformer, ...] = (
    Transformer("undefined", lambda _value: False, lambda _value: 0, lambda _value: None),
    Transformer("date", lambda value: isinstance(value, datetime), _format_date, _parse_date),
    Transformer("error", lambda value: isinstance(value, BaseException), _error_to_value, _error_from_value),
    Transformer("formData", lambda value: isinstance(value, FormData), _form_to_value, _form_from_value),
    Transformer("bigint", _is_bigint, str, int),
)


class StartSerializer:
    """Tag-based JSON serializer compatible with the server function wire format."""

    def __init__(self, transformers: tuple[Transformer, ...] | None = None):
        self.transformers = tuple(transformers if transformers is not None else DEFAULT_TRANSFORMERS)

    def _find_for_value(self, value: Any) -> Transformer | None:
        for transformer in self.transformers:
            if transformer.check(value):
                return transformer
        return None

    def _find_for_tag(self, value: Mapping[str, Any]) -> Transformer | None:
        for transformer in self.transformers:
            if transformer.tag in value:
                return transformer
        return None

    def encode(self, value: Any, *, _stack: set[int] | None = None) -> Any:
        """Convert `value` into a JSON-compatible tree, tagging rich values."""
        transformer = self._find_for_value(value)
        if transformer is not None:
            return {transformer.tag: self.encode(transformer.to_value(value), _stack=_stack)}

        if value is None or isinstance(value, (str, int, float, bool)):
            return value

        if isinstance(value, (Mapping, list, tuple)):
            if _stack is None:
                _stack = set()
            obj_id = id(value)
            if obj_id in _stack:
                raise ValueError("Circular reference detected")
            _stack.add(obj_id)
            try:
                if isinstance(value, Mapping):
                    return {str(k): self.encode(v, _stack=_stack) for k, v in value.items()}
                return [self.encode(item, _stack=_stack) for item in value]
            finally:
                _stack.discard(obj_id)

        raise TypeError(f"Object of type {type(value).__name__} is not serializable")

    def decode(self, value: Any) -> Any:
        """Revive tagged mappings found anywhere in a parsed JSON tree."""
        if isinstance(value, list):
            return [self.decode(item) for item in value]
        if isinstance(value, Mapping):
            transformer = self._find_for_tag(value)
            if transformer is not None:
                return transformer.from_value(self.decode(value[transformer.tag]))
            return {k: self.decode(v) for k, v in value.items()}
        return value

    def stringify(self, value: Any) -> str:
        return json.dumps(self.encode(value), separators=(",", ":"))

    def parse(self, text: str) -> Any:
        return self.decode(json.loads(text))


start_serializer = StartSerializer()


__all__ = [
    "DEFAULT_TRANSFORMERS",
    "MAX_SAFE_INTEGER",
    "Serializer",
    "StartSerializer",
    "Transformer",
    "start_serializer",
]
