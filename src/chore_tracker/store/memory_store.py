# src/chore_tracker/store/memory_store.py

from __future__ import annotations

import copy
import logging
import threading
import uuid
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Any, Mapping

from ..core.ports import Row
from .errors import StoreError

logger = logging.getLogger(__name__)

DEMO_CATEGORIES = ["Kitchen", "Bathroom", "Outdoor"]


class InMemoryStore:
    """
    Process-local RecordStore used for demos when no external store is configured,
    and by the test suite.

    Behavior mirrors the hosted store where the app can observe it:
    - ids are store-assigned uuid strings
    - created_at is stamped on insert (strictly increasing, so creation order is stable)
    - unknown tables raise StoreError(status=404)
    """

    def __init__(self, tables: Iterable[str] = ("tasks", "categories")) -> None:
        self._tables: dict[str, dict[str, Row]] = {name: {} for name in tables}
        self._lock = threading.Lock()
        self._last_created: datetime | None = None

    def close(self) -> None:
        return

    # ---- helpers ----

    def _table(self, table: str) -> dict[str, Row]:
        rows = self._tables.get(table)
        if rows is None:
            raise StoreError(f'relation "{table}" does not exist', status=404, code="42P01")
        return rows

    def _next_created_at(self) -> str:
        now = datetime.now(UTC)
        if self._last_created is not None and now <= self._last_created:
            now = self._last_created + timedelta(microseconds=1)
        self._last_created = now
        return now.isoformat()

    # ---- RecordStore ----

    def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[Row]:
        with self._lock:
            rows = [copy.deepcopy(r) for r in self._table(table).values()]

        for column, value in (filters or {}).items():
            rows = [r for r in rows if r.get(column) == value]

        if order_by:
            present = [r for r in rows if r.get(order_by) is not None]
            missing = [r for r in rows if r.get(order_by) is None]
            present.sort(key=lambda r: r[order_by], reverse=not ascending)
            # PostgREST default: NULLS LAST for asc, NULLS FIRST for desc
            rows = present + missing if ascending else missing + present

        return rows

    def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        with self._lock:
            rows = self._table(table)
            new_row = dict(copy.deepcopy(row))
            new_row.setdefault("id", str(uuid.uuid4()))
            new_row.setdefault("created_at", self._next_created_at())
            row_id = str(new_row["id"])
            if row_id in rows:
                raise StoreError(
                    "duplicate key value violates unique constraint",
                    status=409,
                    code="23505",
                )
            rows[row_id] = new_row
            logger.debug("Inserted %s id=%s", table, row_id)
            return copy.deepcopy(new_row)

    def update(self, table: str, row_id: str, fields: Mapping[str, Any]) -> list[Row]:
        with self._lock:
            rows = self._table(table)
            existing = rows.get(str(row_id))
            if existing is None:
                return []
            existing.update(copy.deepcopy(dict(fields)))
            existing["id"] = str(row_id)
            return [copy.deepcopy(existing)]

    def delete(self, table: str, row_id: str) -> None:
        with self._lock:
            self._table(table).pop(str(row_id), None)


def seed_demo_data(store: InMemoryStore) -> None:
    """Put a few categories in place so the demo filter has something to show."""
    for name in DEMO_CATEGORIES:
        store.insert("categories", {"name": name})
    logger.info("Demo store seeded with %d categories", len(DEMO_CATEGORIES))
