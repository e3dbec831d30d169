# src/chore_tracker/cli/bootstrap.py

"""
Bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the concrete record store into AppState (hosted PostgREST or in-memory demo).
"""

from __future__ import annotations

import logging

from ..chores.chore_store import ChoreStore
from ..config import get_settings
from ..core.ports import RecordStore
from ..core.state import AppState
from ..store.memory_store import InMemoryStore, seed_demo_data
from ..store.postgrest_client import PostgrestStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def _demo_store() -> InMemoryStore:
    store = InMemoryStore()
    seed_demo_data(store)
    return store


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    records: RecordStore
    demo_mode = False
    if settings.store_url and settings.store_key:
        records = PostgrestStore(
            settings.store_url,
            settings.store_key,
            timeout_seconds=settings.store_timeout_seconds,
        )
    else:
        logger.warning(
            "No store configured (set CHORES_STORE_URL and CHORES_STORE_KEY); "
            "running on an in-memory demo store, changes are lost on exit."
        )
        records = _demo_store()
        demo_mode = True

    return AppState(settings=settings, store=ChoreStore(records), demo_mode=demo_mode)
