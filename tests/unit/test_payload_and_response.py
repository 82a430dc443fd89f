# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
from urllib.parse import parse_qsl, urlsplit

import pytest

from serverfn.errors import ServerError, ServerFnResponseError
from serverfn.forms import File, FormData
from serverfn.http.models import HttpResponse
from serverfn.payload import CONTEXT_FIELD, CallDescriptor, PayloadKind, build_body, build_query
from serverfn.response import (
    normalize_positional_response,
    normalize_structured_response,
    raise_for_response,
    raise_if_signal,
)
from serverfn.serializer import start_serializer
from serverfn.signals import NotFoundSignal, RedirectSignal


def _json_response(payload, *, status=200):
    return HttpResponse(
        ok=200 <= status < 300,
        status_code=status,
        headers={"content-type": "application/json"},
        content=json.dumps(payload).encode(),
    )


def test_payload_kind():
    assert CallDescriptor("POST", data=FormData()).payload_kind is PayloadKind.FORM
    assert CallDescriptor("POST", data={"a": 1}).payload_kind is PayloadKind.OBJECT
    assert CallDescriptor("POST").payload_kind is PayloadKind.OBJECT


def test_build_body_object_envelope():
    body = build_body(CallDescriptor("POST", data={"x": 1}, context={"c": 2}), start_serializer)
    assert json.loads(body) == {"data": {"x": 1}, "context": {"c": 2}}

    body = build_body(CallDescriptor("PUT", data=None, context={}), start_serializer)
    assert json.loads(body) == {"data": None, "context": {}}


def test_build_body_form_carries_context_without_mutating_input():
    form = FormData([("name", "x"), ("file", File(content=b"1"))])
    body = build_body(CallDescriptor("POST", data=form, context={"user": "u"}), start_serializer)

    assert isinstance(body, FormData)
    assert body is not form
    assert CONTEXT_FIELD not in form
    assert json.loads(body.get(CONTEXT_FIELD)) == {"user": "u"}
    assert body.get("file") == File(content=b"1")


def test_build_body_is_empty_for_get():
    assert build_body(CallDescriptor("GET", data={"x": 1}), start_serializer) is None


def test_build_query_adds_single_payload_param():
    url = build_query("/fn?page=2", CallDescriptor("GET", data={"q": "a b&c"}, context=None), start_serializer)
    parts = urlsplit(url)
    params = parse_qsl(parts.query)
    assert params[0] == ("page", "2")
    assert params[1][0] == "payload"
    assert len(params) == 2
    assert start_serializer.parse(params[1][1]) == {"data": {"q": "a b&c"}, "context": None}


def test_raise_for_response_passes_ok_responses():
    resp = HttpResponse(ok=True, status_code=200)
    assert raise_for_response(resp, start_serializer) is resp


def test_raise_for_response_json_payload_is_preserved():
    with pytest.raises(ServerFnResponseError) as excinfo:
        raise_for_response(_json_response({"message": "boom"}, status=500), start_serializer)
    assert excinfo.value.status_code == 500
    assert excinfo.value.payload == {"message": "boom"}
    assert str(excinfo.value) == "boom"


def test_raise_for_response_raises_serialized_errors_directly():
    resp = _json_response({"$error": {"message": "denied", "code": "FORBIDDEN"}}, status=403)
    with pytest.raises(ServerError) as excinfo:
        raise_for_response(resp, start_serializer)
    assert excinfo.value.code == "FORBIDDEN"


def test_raise_for_response_text_body():
    resp = HttpResponse(ok=False, status_code=502, headers={"content-type": "text/html"}, content=b"Bad gateway")
    with pytest.raises(ServerFnResponseError) as excinfo:
        raise_for_response(resp, start_serializer)
    assert str(excinfo.value) == "Bad gateway"
    assert excinfo.value.text == "Bad gateway"
    assert excinfo.value.payload is None

    empty = HttpResponse(ok=False, status_code=503)
    with pytest.raises(ServerFnResponseError, match="503"):
        raise_for_response(empty, start_serializer)


def test_raise_if_signal():
    assert raise_if_signal({"value": 1}) == {"value": 1}
    assert raise_if_signal(None) is None
    with pytest.raises(RedirectSignal):
        raise_if_signal({"isRedirect": True, "to": "/login"})
    with pytest.raises(NotFoundSignal):
        raise_if_signal({"isNotFound": True})
    with pytest.raises(ServerError):
        raise_if_signal(ServerError("x"))


def test_normalize_structured_response_decodes_json():
    resp = _json_response({"when": {"$date": "2025-01-01T00:00:00.000Z"}, "n": 1})
    result = normalize_structured_response(resp, start_serializer)
    assert result["n"] == 1
    assert result["when"].year == 2025


def test_normalize_structured_response_raises_signals():
    with pytest.raises(RedirectSignal) as excinfo:
        normalize_structured_response(_json_response({"isRedirect": True, "to": "/login"}), start_serializer)
    assert excinfo.value.to == "/login"
    assert excinfo.value.status_code == 307

    with pytest.raises(NotFoundSignal) as nf:
        normalize_structured_response(_json_response({"isNotFound": True, "routeId": "/posts/$id"}), start_serializer)
    assert nf.value.route_id == "/posts/$id"

    with pytest.raises(ServerError, match="nope"):
        normalize_structured_response(_json_response({"$error": {"message": "nope"}}), start_serializer)


def test_normalize_structured_response_returns_raw_response_for_other_content():
    resp = HttpResponse(ok=True, status_code=200, headers={"content-type": "application/pdf"}, content=b"%PDF")
    assert normalize_structured_response(resp, start_serializer) is resp


def test_normalize_positional_response():
    assert normalize_positional_response(_json_response([1, {"$bigint": "9007199254740993"}]), start_serializer) == [
        1,
        9007199254740993,
    ]
    text = HttpResponse(ok=True, status_code=200, headers={"content-type": "text/plain"}, content=b"ok")
    assert normalize_positional_response(text, start_serializer) == "ok"
    # positional results are plain data, even when they look like a redirect
    assert normalize_positional_response(_json_response({"isRedirect": True}), start_serializer) == {"isRedirect": True}
