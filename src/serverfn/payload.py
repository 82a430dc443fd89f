# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Body and query string encoding for structured server function calls."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .forms import FormData
from .http.models import BodyValue
from .http.url import append_query, encode_payload_param
from .serializer import Serializer

CONTEXT_FIELD = "__TSR_CONTEXT"


class PayloadKind(str, Enum):
    FORM = "formData"
    OBJECT = "payload"


@dataclass
class CallDescriptor:
    """One structured call: HTTP method, data payload, context and extra headers."""

    method: str
    data: Any = None
    context: Any = None
    headers: Any = None

    @property
    def payload_kind(self) -> PayloadKind:
        return PayloadKind.FORM if isinstance(self.data, FormData) else PayloadKind.OBJECT

    @property
    def is_get(self) -> bool:
        return self.method.upper() == "GET"


def build_body(descriptor: CallDescriptor, serializer: Serializer) -> BodyValue | None:
    """
    Return the request body for a non-GET call.

    Form payloads are copied and carry the serialized context in a reserved
    field; everything else becomes a `{"data", "context"}` envelope.
    """
    if descriptor.is_get:
        return None

    if descriptor.payload_kind is PayloadKind.FORM:
        form = descriptor.data.copy()
        form.set(CONTEXT_FIELD, serializer.stringify(descriptor.context))
        return form

    return serializer.stringify({"data": descriptor.data, "context": descriptor.context})


def build_query(url: str, descriptor: CallDescriptor, serializer: Serializer) -> str:
    """Fold `{data, context}` into a single `payload` query parameter on `url`."""
    serialized = serializer.stringify({"data": descriptor.data, "context": descriptor.context})
    return append_query(url, encode_payload_param(serialized))


__all__ = ["CONTEXT_FIELD", "CallDescriptor", "PayloadKind", "build_body", "build_query"]
