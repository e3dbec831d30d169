# src/chore_tracker/views/task_list.py

"""
Task list view model.

Owns the client-side sort state and turns a task list into row snapshots for the
templates. Nothing here talks to the store; inputs are plain lists and every
function returns a new value.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any, Callable

from ..chores.chore_models import Category, StatusInfo, Task, category_name
from ..chores.chore_status import next_due, status_for

DEFAULT_BREAKPOINT_PX = 768


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, raw: str | None) -> SortDirection:
        return cls.DESC if (raw or "").strip().lower() == "desc" else cls.ASC


class SortColumn(StrEnum):
    NAME = "name"
    DESCRIPTION = "description"
    FREQUENCY = "frequency_days"
    LAST_COMPLETED = "last_completed"
    STATUS = "status"
    CATEGORY = "category"
    COMPLETED_BY = "completed_by"

    @classmethod
    def parse(cls, raw: str | None) -> SortColumn | None:
        if not raw:
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


COLUMN_TITLES: dict[SortColumn, str] = {
    SortColumn.NAME: "Task",
    SortColumn.DESCRIPTION: "Description",
    SortColumn.FREQUENCY: "Frequency (days)",
    SortColumn.LAST_COMPLETED: "Last Completed",
    SortColumn.STATUS: "Status",
    SortColumn.CATEGORY: "Category",
    SortColumn.COMPLETED_BY: "Completed By",
}


class Layout(StrEnum):
    TABLE = "table"
    CARDS = "cards"


def layout_for_width(width: int | None, breakpoint_px: int = DEFAULT_BREAKPOINT_PX) -> Layout:
    """Cards below the breakpoint, table otherwise (and when the width is not known yet)."""
    if width is None or width <= 0:
        return Layout.TABLE
    return Layout.CARDS if width < breakpoint_px else Layout.TABLE


@dataclass(frozen=True, slots=True)
class SortState:
    """No column means "store order" (creation time ascending)."""

    column: SortColumn | None = None
    direction: SortDirection = SortDirection.ASC

    def toggled(self, column: SortColumn) -> SortState:
        if self.column == column:
            flipped = SortDirection.DESC if self.direction == SortDirection.ASC else SortDirection.ASC
            return SortState(column=column, direction=flipped)
        return SortState(column=column, direction=SortDirection.ASC)

    def indicator(self, column: SortColumn) -> str:
        if self.column != column:
            return ""
        return "▲" if self.direction == SortDirection.ASC else "▼"


def _text_key(value: str | None) -> str:
    return (value or "").casefold()


def _sort_key(column: SortColumn, categories: list[Category]) -> Callable[[Task], Any]:
    if column == SortColumn.NAME:
        return lambda t: _text_key(t.name)
    if column == SortColumn.DESCRIPTION:
        return lambda t: _text_key(t.description)
    if column == SortColumn.COMPLETED_BY:
        return lambda t: _text_key(t.completed_by)
    if column == SortColumn.CATEGORY:
        return lambda t: _text_key(category_name(t.category_id, categories))
    if column == SortColumn.FREQUENCY:
        return lambda t: t.frequency_days
    if column == SortColumn.LAST_COMPLETED:
        # never-completed first
        return lambda t: (t.last_completed is not None, t.last_completed or date.min)
    return next_due


def sort_tasks(
    tasks: list[Task],
    sort: SortState,
    categories: list[Category] | None = None,
) -> list[Task]:
    """Stable sorted copy; equal keys keep their input order in both directions."""
    if sort.column is None:
        return list(tasks)
    key = _sort_key(sort.column, categories or [])
    return sorted(tasks, key=key, reverse=sort.direction == SortDirection.DESC)


@dataclass(frozen=True, slots=True)
class TaskRow:
    task: Task
    status: StatusInfo
    category: str

    @property
    def last_completed_text(self) -> str:
        return self.task.last_completed.isoformat() if self.task.last_completed else "-"

    @property
    def completed_by_text(self) -> str:
        return self.task.completed_by or "-"


def build_rows(
    tasks: list[Task],
    sort: SortState,
    categories: list[Category],
    today: date,
) -> list[TaskRow]:
    return [
        TaskRow(task=t, status=status_for(t, today), category=category_name(t.category_id, categories))
        for t in sort_tasks(tasks, sort, categories)
    ]
