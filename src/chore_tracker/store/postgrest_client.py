# src/chore_tracker/store/postgrest_client.py

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from ..core.ports import Row
from .errors import StoreError

logger = logging.getLogger(__name__)


def _make_timeout(timeout_s: float) -> httpx.Timeout:
    # connect gets its own short budget so a dead endpoint fails fast
    return httpx.Timeout(
        connect=min(5.0, timeout_s),
        read=timeout_s,
        write=timeout_s,
        pool=min(5.0, timeout_s),
    )


def _filter_value(value: Any) -> str:
    """Render a Python value as a PostgREST equality filter."""
    if value is None:
        return "is.null"
    if isinstance(value, bool):
        return f"eq.{'true' if value else 'false'}"
    return f"eq.{value}"


def _error_from_response(resp: httpx.Response) -> StoreError:
    body: Any = None
    try:
        body = resp.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = str(body.get("message") or body.get("error") or resp.reason_phrase)
        return StoreError(
            message,
            status=resp.status_code,
            code=body.get("code"),
            details=body.get("details"),
            hint=body.get("hint"),
        )

    text = resp.text.strip() or resp.reason_phrase
    return StoreError(text, status=resp.status_code)


class PostgrestStore:
    """
    RecordStore over a PostgREST endpoint (the REST surface Supabase exposes at /rest/v1).

    Every row is addressed by its "id" column. The client is a single httpx.Client
    shared by all requests; httpx clients are safe to use from several threads.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout_seconds: float = 10.0,
        schema_path: str = "/rest/v1",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("base_url is required")
        if not api_key:
            raise ValueError("api_key is required")

        self._base = base_url.rstrip("/") + schema_path
        self._client = httpx.Client(
            base_url=self._base,
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
            timeout=_make_timeout(float(timeout_seconds)),
            transport=transport,
        )
        logger.info("PostgrestStore ready url=%s", self._base)

    def close(self) -> None:
        self._client.close()

    # ---- low-level helpers ----

    def _request(
        self,
        method: str,
        table: str,
        *,
        params: Mapping[str, str] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        headers = {"Prefer": prefer} if prefer else None
        try:
            resp = self._client.request(method, f"/{table}", params=params, json=json, headers=headers)
        except httpx.HTTPError as e:
            raise StoreError(f"{method} {table} failed: {e}") from e

        if resp.is_error:
            raise _error_from_response(resp)

        logger.debug("%s %s -> %s", method, table, resp.status_code)
        return resp

    @staticmethod
    def _rows(resp: httpx.Response) -> list[Row]:
        if not resp.content:
            return []
        try:
            data = resp.json()
        except ValueError as e:
            raise StoreError("Store returned a non-JSON body", status=resp.status_code) from e
        if isinstance(data, dict):
            return [data]
        if not isinstance(data, list):
            raise StoreError("Store returned an unexpected body", status=resp.status_code)
        return [r for r in data if isinstance(r, dict)]

    # ---- RecordStore ----

    def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[Row]:
        params: dict[str, str] = {"select": "*"}
        for column, value in (filters or {}).items():
            params[column] = _filter_value(value)
        if order_by:
            params["order"] = f"{order_by}.{'asc' if ascending else 'desc'}"
        return self._rows(self._request("GET", table, params=params))

    def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        resp = self._request("POST", table, json=[dict(row)], prefer="return=representation")
        rows = self._rows(resp)
        if not rows:
            raise StoreError(f"Insert into {table} returned no row", status=resp.status_code)
        return rows[0]

    def update(self, table: str, row_id: str, fields: Mapping[str, Any]) -> list[Row]:
        resp = self._request(
            "PATCH",
            table,
            params={"id": _filter_value(row_id)},
            json=dict(fields),
            prefer="return=representation",
        )
        return self._rows(resp)

    def delete(self, table: str, row_id: str) -> None:
        self._request("DELETE", table, params={"id": _filter_value(row_id)})
