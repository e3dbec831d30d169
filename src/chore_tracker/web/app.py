# src/chore_tracker/web/app.py

from __future__ import annotations

import logging

from flask import Flask
from flask_wtf import CSRFProtect

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..core.state import AppState
from .routes import EXTENSION_KEY, bp

logger = logging.getLogger(__name__)

csrf = CSRFProtect()


def create_app(settings=None, state: AppState | None = None) -> Flask:
    """
    Application factory.

    settings/state are injectable for tests; by default settings come from the
    environment and the store is chosen by create_initial_state().
    """
    if settings is None:
        settings = state.settings if state is not None else get_settings()
    if state is None:
        state = create_initial_state(settings=settings)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.secret_key
    app.extensions[EXTENSION_KEY] = state

    csrf.init_app(app)
    app.register_blueprint(bp)

    logger.info(
        "App created name=%s store=%s",
        getattr(settings, "app_name", "Chores Tracker"),
        "demo" if state.demo_mode else "postgrest",
    )
    return app
