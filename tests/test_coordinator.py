# tests/test_coordinator.py

from __future__ import annotations

from datetime import date

from chore_tracker.chores.chore_store import ChoreStore
from chore_tracker.views.coordinator import ALL_CATEGORIES, ChoreCoordinator, EditorState, ViewState
from chore_tracker.views.task_editor import TaskDraft
from chore_tracker.views.task_list import SortColumn, SortDirection, SortState

from .conftest import TODAY
from .fakes import RecordingStore


def _coordinator(chore_store: ChoreStore) -> ChoreCoordinator:
    coord = ChoreCoordinator(chore_store, today=lambda: TODAY)
    assert coord.load() is True
    return coord


def test_load_orders_tasks_by_creation(chore_store: ChoreStore) -> None:
    coord = _coordinator(chore_store)
    assert [t.name for t in coord.tasks] == ["Dishes", "Mow lawn", "Windows"]
    assert sorted(c.name for c in coord.categories) == ["Kitchen", "Outdoor"]


def test_filter_all_returns_everything_in_order(chore_store: ChoreStore) -> None:
    coord = _coordinator(chore_store)
    assert coord.filtered_tasks(ALL_CATEGORIES) == coord.tasks
    assert coord.filtered_tasks(None) == coord.tasks


def test_filter_by_category_id(chore_store: ChoreStore) -> None:
    coord = _coordinator(chore_store)
    kitchen = next(c for c in coord.categories if c.name == "Kitchen")
    out = coord.filtered_tasks(kitchen.id)
    assert [t.name for t in out] == ["Dishes"]
    assert all(t.category_id == kitchen.id for t in out)
    assert coord.filtered_tasks("no-such-category") == []


def test_mark_complete_stamps_today_and_label_then_reloads(
    chore_store: ChoreStore, records: RecordingStore
) -> None:
    coord = _coordinator(chore_store)
    windows = next(t for t in coord.tasks if t.name == "Windows")

    assert coord.mark_complete(windows.id, "Krista") is True

    update = records.writes("update")[0]
    assert update.row_id == windows.id
    assert update.payload == {"last_completed": "2024-06-15", "completed_by": "Krista"}

    reloaded = coord.find_task(windows.id)
    assert reloaded is not None
    assert reloaded.last_completed == date(2024, 6, 15)
    assert reloaded.completed_by == "Krista"


def test_mark_complete_failure_leaves_cache_alone(chore_store: ChoreStore, records: RecordingStore) -> None:
    coord = _coordinator(chore_store)
    windows = next(t for t in coord.tasks if t.name == "Windows")
    records.fail_ops.add("update")

    assert coord.mark_complete(windows.id, "Team") is False
    assert coord.find_task(windows.id) == windows


def test_load_failure_is_not_fatal(chore_store: ChoreStore, records: RecordingStore) -> None:
    records.fail_ops.add("select")
    coord = ChoreCoordinator(chore_store, today=lambda: TODAY)
    assert coord.load() is False
    assert coord.tasks == []
    assert coord.categories == []


def test_editor_states_are_mutually_exclusive(chore_store: ChoreStore) -> None:
    coord = _coordinator(chore_store)
    mow = next(t for t in coord.tasks if t.name == "Mow lawn")

    assert coord.editor() is None

    coord.open_new()
    assert coord.editor_state == EditorState(open=True)
    assert coord.editor_state.is_new
    assert coord.editor().is_new

    assert coord.open_edit(mow.id) is True
    assert coord.editor_state == EditorState(open=True, task_id=mow.id)
    assert not coord.editor_state.is_new
    assert coord.editor().task == mow

    coord.close_editor()
    assert coord.editor() is None

    assert coord.open_edit("missing") is False
    assert coord.editor() is None


def test_editor_save_reloads_and_closes(chore_store: ChoreStore) -> None:
    coord = _coordinator(chore_store)
    coord.open_new()
    editor = coord.editor()

    assert editor.submit(TaskDraft(name="Vacuum", frequency_days=4)) is True
    assert coord.editor() is None
    assert [t.name for t in coord.tasks] == ["Dishes", "Mow lawn", "Windows", "Vacuum"]


def test_editor_failure_keeps_it_open(chore_store: ChoreStore, records: RecordingStore) -> None:
    coord = _coordinator(chore_store)
    mow = next(t for t in coord.tasks if t.name == "Mow lawn")
    coord.open_edit(mow.id)
    records.fail_ops.add("update")

    assert coord.editor().submit(TaskDraft.from_task(mow)) is False
    assert coord.editor_state == EditorState(open=True, task_id=mow.id)


def test_view_state_round_trip() -> None:
    view = ViewState.from_args({"category": "c1", "sort": "status", "dir": "desc"})
    assert view.category == "c1"
    assert view.sort == SortState(SortColumn.STATUS, SortDirection.DESC)
    assert view.as_args() == {"category": "c1", "sort": "status", "dir": "desc"}
    assert view.sort_args(SortColumn.STATUS) == {"category": "c1", "sort": "status", "dir": "asc"}
    assert view.sort_args(SortColumn.NAME) == {"category": "c1", "sort": "name", "dir": "asc"}


def test_view_state_defaults_and_garbage() -> None:
    assert ViewState.from_args({}) == ViewState()
    assert ViewState.from_args({"category": "", "sort": "nope", "dir": "desc"}) == ViewState()
    assert ViewState().as_args() == {}


def test_rows_without_usable_frequency_are_skipped(chore_store: ChoreStore, records: RecordingStore) -> None:
    records.inner.insert("tasks", {"name": "Legacy", "frequency_days": None, "last_completed": "2024-06-01"})
    records.inner.insert("tasks", {"name": "Broken", "frequency_days": 0})

    names = [t.name for t in chore_store.list_tasks()]

    assert names == ["Dishes", "Mow lawn", "Windows"]
