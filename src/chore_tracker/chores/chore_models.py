# src/chore_tracker/chores/chore_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

UNCATEGORIZED = "Uncategorized"


class DueState(StrEnum):
    """
    Derived urgency of a task. Never stored; always recomputed from
    last_completed and frequency_days.
    """

    NOT_COMPLETED = "Not Completed"
    ON_TRACK = "On Track"
    DUE_SOON = "Due Soon"
    ALMOST_DUE = "Almost Due"
    OVERDUE = "Overdue"


@dataclass(frozen=True, slots=True)
class StatusInfo:
    state: DueState
    color: str

    @property
    def label(self) -> str:
        return self.state.value


@dataclass(frozen=True, slots=True)
class Category:
    id: str
    name: str


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    name: str
    frequency_days: int

    description: str | None = None
    last_completed: date | None = None
    category_id: str | None = None
    completed_by: str | None = None
    created_at: str | None = None


def category_name(category_id: str | None, categories: list[Category]) -> str:
    """Display name for a task's category; missing or dangling ids read as Uncategorized."""
    if category_id is None:
        return UNCATEGORIZED
    for c in categories:
        if c.id == category_id:
            return c.name
    return UNCATEGORIZED
