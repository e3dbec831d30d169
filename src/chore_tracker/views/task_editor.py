# src/chore_tracker/views/task_editor.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from ..chores.chore_models import Task
from ..chores.chore_store import ChoreStore
from ..store.errors import StoreError, friendly_store_error_message

logger = logging.getLogger(__name__)

DEFAULT_FREQUENCY_DAYS = 7


@dataclass(frozen=True, slots=True)
class TaskDraft:
    """Form contents for one task. id is None for a task that does not exist yet."""

    name: str = ""
    frequency_days: int = DEFAULT_FREQUENCY_DAYS
    description: str | None = None
    category_id: str | None = None
    last_completed: date | None = None
    id: str | None = None

    @classmethod
    def from_task(cls, task: Task) -> TaskDraft:
        return cls(
            id=task.id,
            name=task.name,
            frequency_days=task.frequency_days,
            description=task.description,
            category_id=task.category_id,
            last_completed=task.last_completed,
        )


class TaskEditor:
    """
    Create/update/delete one task against the store.

    On success the editor calls on_saved (the caller refreshes its list and closes
    the editor) and returns True. On a store failure the error is logged, on_saved
    is not called and False is returned, so the form stays open for a retry.
    """

    def __init__(
        self,
        store: ChoreStore,
        task: Task | None = None,
        *,
        on_saved: Callable[[], None] | None = None,
    ) -> None:
        self._store = store
        self._task = task
        self._on_saved = on_saved

    @property
    def task(self) -> Task | None:
        return self._task

    @property
    def is_new(self) -> bool:
        return self._task is None

    @property
    def title(self) -> str:
        return "Add New Task" if self.is_new else "Edit Task"

    @property
    def submit_label(self) -> str:
        return "Add Task" if self.is_new else "Save"

    def initial_draft(self) -> TaskDraft:
        if self._task is None:
            return TaskDraft()
        return TaskDraft.from_task(self._task)

    def _saved(self) -> None:
        if self._on_saved is not None:
            self._on_saved()

    def submit(self, draft: TaskDraft) -> bool:
        """Insert when the draft has no id, otherwise update that id. Exactly one write."""
        try:
            if draft.id:
                self._store.update_task(
                    draft.id,
                    name=draft.name,
                    frequency_days=draft.frequency_days,
                    description=draft.description,
                    category_id=draft.category_id,
                    last_completed=draft.last_completed,
                )
            else:
                self._store.add_task(
                    name=draft.name,
                    frequency_days=draft.frequency_days,
                    description=draft.description,
                    category_id=draft.category_id,
                    last_completed=draft.last_completed,
                )
        except StoreError as e:
            logger.exception("Task save failed id=%s: %s", draft.id, friendly_store_error_message(e))
            return False
        except ValueError:
            logger.exception("Task save rejected id=%s", draft.id)
            return False

        self._saved()
        return True

    def delete(self, confirm: Callable[[], bool]) -> bool:
        """Delete the edited task after confirm() agrees. New tasks have nothing to delete."""
        if self._task is None:
            return False
        if not confirm():
            logger.debug("Task delete not confirmed id=%s", self._task.id)
            return False

        try:
            self._store.delete_task(self._task.id)
        except StoreError as e:
            logger.exception("Task delete failed id=%s: %s", self._task.id, friendly_store_error_message(e))
            return False

        self._saved()
        return True
