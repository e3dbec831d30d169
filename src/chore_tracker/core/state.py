# src/chore_tracker/core/state.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from ..chores.chore_store import ChoreStore


@dataclass
class AppState:
    # Store Settings on the state for easy access from the web layer.
    settings: object

    store: ChoreStore
    demo_mode: bool = False

    # Clock for due-state and mark-complete; tests pin it.
    today: Callable[[], date] = field(default=date.today)

    def close(self) -> None:
        self.store.close()
