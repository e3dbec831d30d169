# src/chore_tracker/views/coordinator.py

"""
Root coordinator for the chores page.

Holds the transient copy of tasks/categories loaded from the store, derives the
category-filtered list, performs mark-complete, and decides which editor (if any)
is open. The store stays the only source of truth: every successful write is
followed by a full reload of the task list.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date

from ..chores.chore_models import Category, Task
from ..chores.chore_store import ChoreStore
from ..store.errors import StoreError, friendly_store_error_message
from .task_editor import TaskEditor
from .task_list import SortColumn, SortDirection, SortState

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"


@dataclass(frozen=True, slots=True)
class ViewState:
    """What the page is showing: category filter and sort. Travels in query args."""

    category: str = ALL_CATEGORIES
    sort: SortState = field(default_factory=SortState)

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> ViewState:
        category = (args.get("category") or "").strip() or ALL_CATEGORIES
        column = SortColumn.parse(args.get("sort"))
        direction = SortDirection.parse(args.get("dir")) if column else SortDirection.ASC
        return cls(category=category, sort=SortState(column=column, direction=direction))

    def as_args(self, *, sort: SortState | None = None) -> dict[str, str]:
        sort = self.sort if sort is None else sort
        out: dict[str, str] = {}
        if self.category != ALL_CATEGORIES:
            out["category"] = self.category
        if sort.column is not None:
            out["sort"] = sort.column.value
            out["dir"] = sort.direction.value
        return out

    def sort_args(self, column: SortColumn) -> dict[str, str]:
        return self.as_args(sort=self.sort.toggled(column))


@dataclass(frozen=True, slots=True)
class EditorState:
    """Closed, adding a new task, or editing task_id; never two at once."""

    open: bool = False
    task_id: str | None = None

    @property
    def is_new(self) -> bool:
        return self.open and self.task_id is None


EDITOR_CLOSED = EditorState()


def filter_by_category(tasks: list[Task], category: str | None) -> list[Task]:
    if not category or category == ALL_CATEGORIES:
        return list(tasks)
    return [t for t in tasks if t.category_id == category]


class ChoreCoordinator:
    def __init__(self, store: ChoreStore, *, today: Callable[[], date] = date.today) -> None:
        self._store = store
        self._today = today
        self._tasks: list[Task] = []
        self._categories: list[Category] = []
        self._editor_state = EDITOR_CLOSED

    # ---- snapshots ----

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    @property
    def editor_state(self) -> EditorState:
        return self._editor_state

    def today(self) -> date:
        return self._today()

    def find_task(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    # ---- loading ----

    def reload_tasks(self) -> bool:
        try:
            self._tasks = self._store.list_tasks()
        except StoreError as e:
            logger.exception("Loading tasks failed: %s", friendly_store_error_message(e))
            return False
        logger.debug("Loaded %d tasks", len(self._tasks))
        return True

    def reload_categories(self) -> bool:
        try:
            self._categories = self._store.list_categories()
        except StoreError as e:
            logger.exception("Loading categories failed: %s", friendly_store_error_message(e))
            return False
        return True

    def load(self) -> bool:
        tasks_ok = self.reload_tasks()
        categories_ok = self.reload_categories()
        return tasks_ok and categories_ok

    # ---- derived ----

    def filtered_tasks(self, category: str | None = ALL_CATEGORIES) -> list[Task]:
        return filter_by_category(self._tasks, category)

    # ---- actions ----

    def mark_complete(self, task_id: str, completed_by: str | None) -> bool:
        try:
            self._store.complete_task(task_id, completed_by=completed_by, on=self.today())
        except StoreError as e:
            logger.exception("Mark complete failed id=%s: %s", task_id, friendly_store_error_message(e))
            return False
        self.reload_tasks()
        return True

    def open_new(self) -> None:
        self._editor_state = EditorState(open=True)

    def open_edit(self, task_id: str) -> bool:
        if self.find_task(task_id) is None:
            logger.info("Edit requested for unknown task id=%s", task_id)
            self._editor_state = EDITOR_CLOSED
            return False
        self._editor_state = EditorState(open=True, task_id=task_id)
        return True

    def close_editor(self) -> None:
        self._editor_state = EDITOR_CLOSED

    def _on_saved(self) -> None:
        self.reload_tasks()
        self.close_editor()

    def editor(self) -> TaskEditor | None:
        state = self._editor_state
        if not state.open:
            return None
        task = self.find_task(state.task_id) if state.task_id else None
        return TaskEditor(self._store, task, on_saved=self._on_saved)
