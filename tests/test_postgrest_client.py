# tests/test_postgrest_client.py

from __future__ import annotations

import json

import httpx
import pytest

from chore_tracker.store.errors import StoreError, friendly_store_error_message
from chore_tracker.store.postgrest_client import PostgrestStore

BASE = "https://demo.supabase.co"


class Recorder:
    """MockTransport handler that records requests and replies from a queue."""

    def __init__(self, *responses: httpx.Response) -> None:
        self.requests: list[httpx.Request] = []
        self._responses = list(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responses.pop(0)


def _store(handler) -> PostgrestStore:
    return PostgrestStore(BASE + "/", "anon-key", transport=httpx.MockTransport(handler))


def test_select_with_filter_and_order() -> None:
    rec = Recorder(httpx.Response(200, json=[{"id": "1", "name": "Dishes"}]))
    store = _store(rec)

    rows = store.select("tasks", filters={"category_id": "c1"}, order_by="created_at", ascending=True)

    assert rows == [{"id": "1", "name": "Dishes"}]
    req = rec.requests[0]
    assert req.method == "GET"
    assert req.url.path == "/rest/v1/tasks"
    assert req.url.params["select"] == "*"
    assert req.url.params["category_id"] == "eq.c1"
    assert req.url.params["order"] == "created_at.asc"
    assert req.headers["apikey"] == "anon-key"
    assert req.headers["authorization"] == "Bearer anon-key"


def test_select_descending_and_null_filter() -> None:
    rec = Recorder(httpx.Response(200, json=[]))
    store = _store(rec)

    assert store.select("tasks", filters={"category_id": None}, order_by="name", ascending=False) == []
    params = rec.requests[0].url.params
    assert params["category_id"] == "is.null"
    assert params["order"] == "name.desc"


def test_insert_posts_a_single_row_and_returns_it() -> None:
    rec = Recorder(httpx.Response(201, json=[{"id": "new", "name": "Vacuum", "frequency_days": 3}]))
    store = _store(rec)

    row = store.insert("tasks", {"name": "Vacuum", "frequency_days": 3})

    assert row["id"] == "new"
    req = rec.requests[0]
    assert req.method == "POST"
    assert req.headers["prefer"] == "return=representation"
    assert json.loads(req.content) == [{"name": "Vacuum", "frequency_days": 3}]


def test_update_patches_by_id() -> None:
    rec = Recorder(httpx.Response(200, json=[{"id": "t1", "completed_by": "Team"}]))
    store = _store(rec)

    rows = store.update("tasks", "t1", {"completed_by": "Team"})

    assert rows == [{"id": "t1", "completed_by": "Team"}]
    req = rec.requests[0]
    assert req.method == "PATCH"
    assert req.url.params["id"] == "eq.t1"
    assert json.loads(req.content) == {"completed_by": "Team"}


def test_delete_by_id_accepts_empty_body() -> None:
    rec = Recorder(httpx.Response(204))
    store = _store(rec)

    store.delete("tasks", "t1")

    req = rec.requests[0]
    assert req.method == "DELETE"
    assert req.url.params["id"] == "eq.t1"


def test_error_body_becomes_store_error() -> None:
    body = {"code": "23502", "message": 'null value in column "name"', "details": None, "hint": None}
    store = _store(Recorder(httpx.Response(400, json=body)))

    with pytest.raises(StoreError) as exc_info:
        store.insert("tasks", {"frequency_days": 3})

    err = exc_info.value
    assert err.status == 400
    assert err.code == "23502"
    assert "null value" in err.message
    assert friendly_store_error_message(err).startswith("Store rejected the request")


def test_auth_failure_message() -> None:
    store = _store(Recorder(httpx.Response(401, json={"message": "Invalid API key"})))
    with pytest.raises(StoreError) as exc_info:
        store.select("tasks")
    assert exc_info.value.status == 401
    assert "credentials" in friendly_store_error_message(exc_info.value)


def test_non_json_error_body() -> None:
    store = _store(Recorder(httpx.Response(502, text="Bad Gateway")))
    with pytest.raises(StoreError) as exc_info:
        store.select("tasks")
    assert exc_info.value.status == 502
    assert exc_info.value.message == "Bad Gateway"


def test_transport_error_becomes_store_error() -> None:
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    store = _store(boom)
    with pytest.raises(StoreError) as exc_info:
        store.select("categories")
    assert exc_info.value.status is None
    assert friendly_store_error_message(exc_info.value).startswith("Store unreachable")


def test_constructor_requires_endpoint_and_key() -> None:
    with pytest.raises(ValueError):
        PostgrestStore("", "key")
    with pytest.raises(ValueError):
        PostgrestStore(BASE, "")
