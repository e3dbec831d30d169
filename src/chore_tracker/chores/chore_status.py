# src/chore_tracker/chores/chore_status.py

"""
Due-state classification.

ratio = days since last completion / frequency_days

    last_completed is None  -> Not Completed
    ratio > 1               -> Overdue
    ratio > 0.9             -> Almost Due
    ratio > 0.75            -> Due Soon
    otherwise               -> On Track

Elapsed time is counted in whole calendar days, so a task done today has ratio 0
and a task done exactly frequency_days ago sits at ratio 1.0 (Almost Due, not Overdue).
This lags a continuous clock (fractional days since the completion instant) by up
to one day: a daily task done yesterday stays Almost Due for all of today instead
of turning Overdue partway through it.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta

from .chore_models import DueState, StatusInfo, Task

STATUS_COLORS: dict[DueState, str] = {
    DueState.NOT_COMPLETED: "#e0e0e0",  # gray
    DueState.OVERDUE: "#f28b82",  # red
    DueState.ALMOST_DUE: "#fbbc04",  # orange
    DueState.DUE_SOON: "#fff475",  # yellow
    DueState.ON_TRACK: "#ccff90",  # green
}

OVERDUE_RATIO = 1.0
ALMOST_DUE_RATIO = 0.9
DUE_SOON_RATIO = 0.75

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _check_frequency(frequency_days: int) -> None:
    if frequency_days <= 0:
        raise ValueError(f"frequency_days must be a positive integer, got {frequency_days!r}")


def classify_ratio(days_elapsed: float | None, frequency_days: int) -> DueState:
    _check_frequency(frequency_days)
    if days_elapsed is None:
        return DueState.NOT_COMPLETED

    ratio = days_elapsed / frequency_days
    if ratio > OVERDUE_RATIO:
        return DueState.OVERDUE
    if ratio > ALMOST_DUE_RATIO:
        return DueState.ALMOST_DUE
    if ratio > DUE_SOON_RATIO:
        return DueState.DUE_SOON
    return DueState.ON_TRACK


def classify(last_completed: date | None, frequency_days: int, today: date) -> DueState:
    if last_completed is None:
        return classify_ratio(None, frequency_days)
    return classify_ratio((today - last_completed).days, frequency_days)


def status_for(task: Task, today: date) -> StatusInfo:
    state = classify(task.last_completed, task.frequency_days, today)
    return StatusInfo(state=state, color=STATUS_COLORS[state])


def next_due(task: Task) -> datetime:
    """When the task falls due; never-completed tasks sort as due at the epoch."""
    if task.last_completed is None:
        return EPOCH
    start = datetime.combine(task.last_completed, time.min, tzinfo=UTC)
    return start + timedelta(days=task.frequency_days)
