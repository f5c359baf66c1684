"""Request builder contract: headers, deterministic bodies, field merging."""

from __future__ import annotations

import json

import pytest
from pydantic_core import PydanticSerializationError

from chat_relay.backends import FirebaseRequestBuilder, SupabaseRequestBuilder, serialize_body
from chat_relay.base.dto import ChatMessage, ChatQuery
from chat_relay.base.errors import ErrorCode, RequestBuildError
from relay_helpers import CHAT_URL


def _query() -> ChatQuery:
    return ChatQuery(model="x", messages=[ChatMessage(role="user", content="hi")], temperature=0.2)


def test_firebase_sets_appcheck_header_verbatim():
    req = FirebaseRequestBuilder().build(_query(), CHAT_URL, "tok-123", 30.0)
    assert req.headers["X-Firebase-AppCheck"] == "tok-123"
    assert "Authorization" not in req.headers
    assert req.headers["Content-Type"] == "application/json"
    assert req.method == "POST"
    assert req.url == CHAT_URL
    assert req.timeout == 30.0


def test_supabase_sets_bearer_authorization():
    req = SupabaseRequestBuilder().build(_query(), CHAT_URL, "tok-123", 30.0)
    assert req.headers["Authorization"] == "Bearer tok-123"
    assert "X-Firebase-AppCheck" not in req.headers
    assert req.headers["Content-Type"] == "application/json"


@pytest.mark.parametrize("builder", [FirebaseRequestBuilder(), SupabaseRequestBuilder()])
def test_missing_token_omits_auth_header(builder):
    req = builder.build(_query(), CHAT_URL, None, 10.0)
    assert set(req.headers) == {"Content-Type"}


@pytest.mark.parametrize("builder", [FirebaseRequestBuilder(), SupabaseRequestBuilder()])
def test_build_is_deterministic(builder):
    a = builder.build(_query(), CHAT_URL, "t", 5.0, extra_fields={"user_id": "u1"})
    b = builder.build(_query(), CHAT_URL, "t", 5.0, extra_fields={"user_id": "u1"})
    assert a.body == b.body
    assert a.headers == b.headers
    assert a == b


def test_unset_fields_are_omitted_from_body():
    payload = json.loads(FirebaseRequestBuilder().build(_query(), CHAT_URL, "t", 5.0).body)
    assert "stream" not in payload
    assert "max_tokens" not in payload
    assert payload["temperature"] == 0.2


def test_user_id_merged_into_top_level_body():
    req = SupabaseRequestBuilder().build({"model": "x"}, CHAT_URL, "t", 5.0, extra_fields={"user_id": "u123"})
    assert json.loads(req.body) == {"model": "x", "user_id": "u123"}
    assert "user_id" not in {k.lower() for k in req.headers}


def test_existing_user_id_is_overwritten_not_duplicated():
    req = SupabaseRequestBuilder().build(
        {"model": "x", "user_id": "old"}, CHAT_URL, "t", 5.0, extra_fields={"user_id": "u123"}
    )
    assert req.body.count(b'"user_id"') == 1
    assert json.loads(req.body) == {"model": "x", "user_id": "u123"}


def test_serialization_failure_raises_build_error():
    with pytest.raises(RequestBuildError) as excinfo:
        FirebaseRequestBuilder().build({"model": object()}, CHAT_URL, "t", 5.0)
    assert excinfo.value.code is ErrorCode.BUILD
    assert isinstance(excinfo.value.raw, TypeError)


def test_extra_fields_require_object_body():
    with pytest.raises(RequestBuildError):
        serialize_body(["not", "an", "object"], {"user_id": "u"})


def test_none_body_without_extras_is_empty():
    assert serialize_body(None) == b""
    assert json.loads(serialize_body(None, {"user_id": "u"})) == {"user_id": "u"}


def test_unserializable_model_field_raises_build_error():
    query = ChatQuery(model="x", messages=[ChatMessage(role="user", content="hi")], tool=object())
    with pytest.raises(RequestBuildError) as excinfo:
        SupabaseRequestBuilder().build(query, CHAT_URL, "t", 5.0, extra_fields={"user_id": "u"})
    assert isinstance(excinfo.value.raw, PydanticSerializationError)
