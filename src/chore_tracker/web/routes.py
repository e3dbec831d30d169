# src/chore_tracker/web/routes.py

"""
Page routes.

Every request builds a fresh ChoreCoordinator over the shared store, so the only
state that survives between requests is what the store holds plus the query
args (filter/sort), the session (completed-by label) and the viewport cookie.
Writes follow post/redirect/get: a successful write redirects back to the list,
which closes the editor and reloads the tasks. A failed write re-renders the
page with the editor still open.
"""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, redirect, render_template, request, session, url_for

from ..core.state import AppState
from ..views.coordinator import ChoreCoordinator, ViewState
from ..views.task_editor import TaskDraft, TaskEditor
from ..views.task_list import COLUMN_TITLES, DEFAULT_BREAKPOINT_PX, SortColumn, build_rows, layout_for_width
from .forms import TaskForm, form_data

logger = logging.getLogger(__name__)

bp = Blueprint("chores", __name__)

EXTENSION_KEY = "chore_tracker"
VIEWPORT_COOKIE = "viewport_width"
COMPLETED_BY_SESSION_KEY = "completed_by"


def _state() -> AppState:
    return current_app.extensions[EXTENSION_KEY]


def _coordinator() -> ChoreCoordinator:
    state = _state()
    return ChoreCoordinator(state.store, today=state.today)


def _view_state() -> ViewState:
    # POST forms carry the current view in hidden fields
    return ViewState.from_args(request.values)


def _completed_by_labels() -> list[str]:
    return list(getattr(_state().settings, "completed_by_labels", []) or [])


def _completed_by() -> str | None:
    labels = _completed_by_labels()
    label = session.get(COMPLETED_BY_SESSION_KEY)
    if label in labels:
        return label
    default = getattr(_state().settings, "completed_by_default", "")
    return default or None


def _viewport_width() -> int | None:
    raw = request.cookies.get(VIEWPORT_COOKIE, "")
    try:
        return int(raw)
    except ValueError:
        return None


def _back_to_list(view: ViewState):
    return redirect(url_for("chores.index", **view.as_args()))


def _editor_form(coord: ChoreCoordinator, editor: TaskEditor) -> TaskForm:
    form = TaskForm(formdata=None, data=form_data(editor.initial_draft()))
    form.set_categories(coord.categories)
    return form


def _render(
    coord: ChoreCoordinator,
    view: ViewState,
    *,
    form: TaskForm | None = None,
    status: int = 200,
):
    settings = _state().settings
    breakpoint_px = int(getattr(settings, "mobile_breakpoint_px", DEFAULT_BREAKPOINT_PX))
    editor = coord.editor()
    if editor is not None and form is None:
        form = _editor_form(coord, editor)

    rows = build_rows(coord.filtered_tasks(view.category), view.sort, coord.categories, coord.today())

    html = render_template(
        "index.html",
        app_name=getattr(settings, "app_name", "Chores Tracker"),
        demo_mode=_state().demo_mode,
        view=view,
        rows=rows,
        categories=coord.categories,
        columns=list(SortColumn),
        column_titles=COLUMN_TITLES,
        layout=layout_for_width(_viewport_width(), breakpoint_px).value,
        breakpoint_px=breakpoint_px,
        completed_by_labels=_completed_by_labels(),
        completed_by=_completed_by(),
        editor=editor,
        form=form,
        can_reload=request.method == "GET",
    )
    return html, status


@bp.get("/")
def index():
    coord = _coordinator()
    coord.load()
    view = _view_state()

    if request.args.get("new"):
        coord.open_new()
    elif request.args.get("edit"):
        coord.open_edit(request.args["edit"])

    return _render(coord, view)


def _save(task_id: str | None):
    coord = _coordinator()
    coord.load()
    view = _view_state()

    if task_id is None:
        coord.open_new()
    elif not coord.open_edit(task_id):
        return _back_to_list(view)

    editor = coord.editor()
    form = TaskForm()
    form.set_categories(coord.categories)

    if not form.validate_on_submit():
        logger.debug("Task form rejected id=%s errors=%s", task_id, form.errors)
        return _render(coord, view, form=form, status=400)

    draft: TaskDraft = form.to_draft(task_id)
    if editor.submit(draft):
        return _back_to_list(view)

    # store failure is already logged; keep the editor open with what the user typed
    return _render(coord, view, form=form, status=502)


@bp.post("/tasks")
def create_task():
    return _save(None)


@bp.post("/tasks/<task_id>")
def update_task(task_id: str):
    return _save(task_id)


@bp.post("/tasks/<task_id>/delete")
def delete_task(task_id: str):
    coord = _coordinator()
    coord.load()
    view = _view_state()

    if not coord.open_edit(task_id):
        return _back_to_list(view)

    confirmed = request.form.get("confirmed") == "yes"
    editor = coord.editor()
    if editor.delete(lambda: confirmed):
        return _back_to_list(view)

    return _render(coord, view, status=200 if not confirmed else 502)


@bp.post("/tasks/<task_id>/complete")
def complete_task(task_id: str):
    coord = _coordinator()
    coord.mark_complete(task_id, _completed_by())
    return _back_to_list(_view_state())


@bp.post("/completed-by")
def set_completed_by():
    label = (request.form.get("completed_by") or "").strip()
    if label in _completed_by_labels():
        session[COMPLETED_BY_SESSION_KEY] = label
    else:
        logger.info("Ignoring unknown completed-by label %r", label)
    return _back_to_list(_view_state())
