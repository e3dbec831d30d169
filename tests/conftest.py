# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from chore_tracker.chores.chore_store import ChoreStore
from chore_tracker.core.state import AppState
from chore_tracker.web.app import create_app

from .fakes import RecordingStore, seed

TODAY = date(2024, 6, 15)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the web layer.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's .env.
    """
    return SimpleNamespace(
        app_name="Chores Tracker",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        store_url=None,
        store_key=None,
        store_timeout_seconds=1.0,
        secret_key="test-secret",
        host="127.0.0.1",
        port=5001,
        debug=False,
        completed_by_labels=["Nick", "Krista", "Team"],
        completed_by_default="Team",
        mobile_breakpoint_px=768,
    )


@pytest.fixture()
def records() -> RecordingStore:
    """
    Recording store seeded with two categories and three tasks (in creation order):

    - Dishes    every 1 day,  done today        (Kitchen)
    - Mow lawn  every 10 days, done 10 days ago (Outdoor)
    - Windows   every 30 days, never done       (uncategorized)
    """
    store = RecordingStore()
    seed(
        store,
        ["Kitchen", "Outdoor"],
        [
            {"name": "Dishes", "frequency_days": 1, "last_completed": "2024-06-15", "category": "Kitchen",
             "completed_by": "Nick"},
            {"name": "Mow lawn", "frequency_days": 10, "last_completed": "2024-06-05", "category": "Outdoor",
             "description": "Front and back"},
            {"name": "Windows", "frequency_days": 30, "last_completed": None},
        ],
    )
    return store


@pytest.fixture()
def chore_store(records: RecordingStore) -> ChoreStore:
    return ChoreStore(records)


@pytest.fixture()
def state(settings: SimpleNamespace, chore_store: ChoreStore) -> AppState:
    return AppState(settings=settings, store=chore_store, today=lambda: TODAY)


@pytest.fixture()
def app(state: AppState):
    app = create_app(state=state)
    app.config["TESTING"] = True
    # Disable CSRF for testing
    app.config["WTF_CSRF_ENABLED"] = False
    return app


@pytest.fixture()
def client(app):
    return app.test_client()
