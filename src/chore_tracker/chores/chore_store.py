# src/chore_tracker/chores/chore_store.py

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from ..core.ports import RecordStore, Row
from .chore_models import Category, Task

logger = logging.getLogger(__name__)

TASKS_TABLE = "tasks"
CATEGORIES_TABLE = "categories"


def _opt_str(value: Any) -> str | None:
    """Empty text is stored and read back as NULL."""
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        # date columns come back as YYYY-MM-DD; tolerate timestamps too
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        logger.warning("Ignoring unparseable last_completed=%r", value)
        return None


def _format_date(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


class ChoreStore:
    """
    Task/category access on top of a generic RecordStore.

    Knows the table names and the row <-> dataclass mapping; everything else
    (filtering, ordering, consistency) is left to the backing store.
    Store failures propagate as StoreError.
    """

    def __init__(self, records: RecordStore) -> None:
        self._records = records

    def close(self) -> None:
        self._records.close()

    # ---- row mapping ----

    @staticmethod
    def _row_to_task(row: Row) -> Task:
        return Task(
            id=str(row["id"]),
            name=str(row.get("name") or ""),
            frequency_days=int(row.get("frequency_days") or 0),
            description=_opt_str(row.get("description")),
            last_completed=_parse_date(row.get("last_completed")),
            category_id=_opt_str(row.get("category_id")),
            completed_by=_opt_str(row.get("completed_by")),
            created_at=_opt_str(row.get("created_at")),
        )

    @staticmethod
    def _row_to_category(row: Row) -> Category:
        return Category(id=str(row["id"]), name=str(row.get("name") or ""))

    @staticmethod
    def _task_fields(
        *,
        name: str,
        frequency_days: int,
        description: str | None,
        category_id: str | None,
        last_completed: date | None,
    ) -> Row:
        if not name or not name.strip():
            raise ValueError("name is required")
        if int(frequency_days) < 1:
            raise ValueError("frequency_days must be at least 1")
        return {
            "name": name.strip(),
            "description": _opt_str(description),
            "frequency_days": int(frequency_days),
            "category_id": _opt_str(category_id),
            "last_completed": _format_date(last_completed),
        }

    # ---- public API ----

    def list_tasks(self) -> list[Task]:
        rows = self._records.select(TASKS_TABLE, order_by="created_at", ascending=True)
        tasks: list[Task] = []
        for r in rows:
            task = self._row_to_task(r)
            # rows written outside this app may lack a usable frequency
            if task.frequency_days < 1:
                logger.warning("Skipping task id=%s: invalid frequency_days=%r", task.id, r.get("frequency_days"))
                continue
            tasks.append(task)
        return tasks

    def list_categories(self) -> list[Category]:
        rows = self._records.select(CATEGORIES_TABLE)
        return [self._row_to_category(r) for r in rows]

    def add_task(
        self,
        *,
        name: str,
        frequency_days: int,
        description: str | None = None,
        category_id: str | None = None,
        last_completed: date | None = None,
    ) -> str:
        fields = self._task_fields(
            name=name,
            frequency_days=frequency_days,
            description=description,
            category_id=category_id,
            last_completed=last_completed,
        )
        row = self._records.insert(TASKS_TABLE, fields)
        task_id = str(row["id"])
        logger.info("Task added id=%s name=%s every=%sd", task_id, fields["name"], fields["frequency_days"])
        return task_id

    def update_task(
        self,
        task_id: str,
        *,
        name: str,
        frequency_days: int,
        description: str | None = None,
        category_id: str | None = None,
        last_completed: date | None = None,
    ) -> None:
        fields = self._task_fields(
            name=name,
            frequency_days=frequency_days,
            description=description,
            category_id=category_id,
            last_completed=last_completed,
        )
        updated = self._records.update(TASKS_TABLE, task_id, fields)
        if not updated:
            logger.warning("Task update matched no row id=%s", task_id)
            return
        logger.info("Task updated id=%s", task_id)

    def complete_task(self, task_id: str, *, completed_by: str | None, on: date) -> None:
        updated = self._records.update(
            TASKS_TABLE,
            task_id,
            {"last_completed": _format_date(on), "completed_by": _opt_str(completed_by)},
        )
        if not updated:
            logger.warning("Task completion matched no row id=%s", task_id)
            return
        logger.info("Task completed id=%s by=%s on=%s", task_id, completed_by, on)

    def delete_task(self, task_id: str) -> None:
        self._records.delete(TASKS_TABLE, task_id)
        logger.info("Task deleted id=%s", task_id)
