# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Detection of binary payloads nested inside call arguments."""

from __future__ import annotations

import io
from collections.abc import Mapping
from enum import Enum
from typing import Any

from .forms import Blob, FormData


class NodeKind(str, Enum):
    BINARY = "binary"
    FORM = "form"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SCALAR = "scalar"


def classify_node(value: Any) -> NodeKind:
    if isinstance(value, (Blob, bytes, bytearray, memoryview)):
        return NodeKind.BINARY
    if isinstance(value, (io.BufferedIOBase, io.RawIOBase)):
        return NodeKind.BINARY
    if isinstance(value, FormData):
        return NodeKind.FORM
    if isinstance(value, Mapping):
        return NodeKind.MAPPING
    if isinstance(value, (list, tuple, set, frozenset)):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


def contains_binary(value: Any, *, _stack: set[int] | None = None) -> bool:
    """
    Return True when `value` is, or contains at any depth, a file/blob-like value.

    Only the current recursion stack is tracked, so a container reached again
    through a cycle is treated as holding no binary data.
    """
    kind = classify_node(value)
    if kind is NodeKind.BINARY:
        return True
    if kind is NodeKind.SCALAR:
        return False

    if _stack is None:
        _stack = set()
    obj_id = id(value)
    if obj_id in _stack:
        return False
    _stack.add(obj_id)
    try:
        children = value if kind is NodeKind.SEQUENCE else value.values()
        return any(contains_binary(child, _stack=_stack) for child in children)
    finally:
        _stack.discard(obj_id)


__all__ = ["NodeKind", "classify_node", "contains_binary"]
