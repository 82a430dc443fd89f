# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
from datetime import datetime, timezone

import pytest

from serverfn.errors import ServerError
from serverfn.forms import File, FormData
from serverfn.serializer import MAX_SAFE_INTEGER, StartSerializer, start_serializer


def test_stringify_plain_json_is_compact():
    assert start_serializer.stringify({"data": {"x": 1}, "context": {}}) == '{"data":{"x":1},"context":{}}'
    assert start_serializer.stringify({"data": None, "context": None}) == '{"data":null,"context":null}'


def test_round_trip_envelope_with_rich_values():
    when = datetime(2025, 3, 1, 12, 30, 0, 123000, tzinfo=timezone.utc)
    envelope = {
        "data": {"when": when, "ids": [1, 2**60], "name": "x", "nested": [{"ok": True}]},
        "context": {"user": "u1", "tags": ("a", "b")},
    }
    decoded = start_serializer.parse(start_serializer.stringify(envelope))
    assert decoded["data"] == {"when": when, "ids": [1, 2**60], "name": "x", "nested": [{"ok": True}]}
    assert decoded["context"] == {"user": "u1", "tags": ["a", "b"]}


def test_date_wire_format_uses_z_suffix():
    when = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert start_serializer.encode(when) == {"$date": "2025-01-02T03:04:05.000Z"}
    assert start_serializer.decode({"$date": "2025-01-02T03:04:05.000Z"}) == when


def test_bigint_only_tags_unsafe_integers():
    assert start_serializer.encode(MAX_SAFE_INTEGER) == MAX_SAFE_INTEGER
    assert start_serializer.encode(MAX_SAFE_INTEGER + 1) == {"$bigint": str(MAX_SAFE_INTEGER + 1)}
    assert start_serializer.encode(True) is True
    assert start_serializer.decode({"$bigint": "123456789012345678901234"}) == 123456789012345678901234


def test_error_values_revive_as_server_error():
    encoded = start_serializer.encode(RuntimeError("bad"))
    assert encoded == {"$error": {"message": "bad", "name": "RuntimeError"}}

    revived = start_serializer.decode({"$error": {"message": "boom", "code": 42}})
    assert isinstance(revived, ServerError)
    assert revived.message == "boom"
    assert revived.code == 42


def test_form_data_tag_keeps_text_entries_only():
    form = FormData([("a", "1"), ("f", File(content=b"x"))])
    assert start_serializer.encode(form) == {"$formData": {"a": "1"}}
    assert start_serializer.decode({"$formData": {"a": "1"}}) == FormData({"a": "1"})


def test_undefined_tag_decodes_to_none():
    assert start_serializer.decode({"value": {"$undefined": 0}}) == {"value": None}


def test_decode_leaves_untagged_mappings_alone():
    raw = json.loads('{"a": {"b": ["$date", {"c": 1}]}}')
    assert start_serializer.decode(raw) == raw


def test_encode_rejects_cycles_and_unknown_types():
    cyclic: list = []
    cyclic.append(cyclic)
    with pytest.raises(ValueError):
        start_serializer.stringify(cyclic)
    with pytest.raises(TypeError):
        start_serializer.stringify({"x": object()})


def test_custom_transformer_set():
    serializer = StartSerializer(transformers=())
    with pytest.raises(TypeError):
        serializer.encode(datetime(2025, 1, 1))
    assert serializer.decode({"$date": "x"}) == {"$date": "x"}


def test_dates_keep_microsecond_precision():
    when = datetime(2025, 3, 1, 12, 30, 0, 123456, tzinfo=timezone.utc)
    assert start_serializer.encode(when) == {"$date": "2025-03-01T12:30:00.123456Z"}
    decoded = start_serializer.parse(start_serializer.stringify({"data": when, "context": None}))
    assert decoded["data"] == when


def test_naive_dates_round_trip_without_offset():
    when = datetime(2025, 3, 1, 12, 30, 0, 7)
    assert start_serializer.encode(when) == {"$date": "2025-03-01T12:30:00.000007"}
    decoded = start_serializer.decode(start_serializer.encode(when))
    assert decoded == when
    assert decoded.tzinfo is None
