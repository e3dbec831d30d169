# src/chore_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time: without a store endpoint the app runs
  against the in-memory demo store.
- Supabase-style variable names are accepted as fallbacks for the store endpoint.
"""

from __future__ import annotations

import os
import secrets
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

ENV_PREFIX = "CHORES"

DEFAULT_COMPLETED_BY_LABELS = ["Nick", "Krista", "Team"]

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    # comma-separated only; labels may contain spaces ("Team A")
    parts = [p.strip() for p in raw.split(",") if p.strip()]
    return parts


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- External store (PostgREST / Supabase) ----
    store_url: Optional[str]
    store_key: Optional[str]
    store_timeout_seconds: float

    # ---- Web server ----
    secret_key: str
    host: str
    port: int
    debug: bool

    # ---- UI ----
    completed_by_labels: List[str]
    completed_by_default: str
    mobile_breakpoint_px: int

    @property
    def store_configured(self) -> bool:
        return bool(self.store_url and self.store_key)

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Chores Tracker")
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/chores"))

        store_url = _first_env(
            _k("STORE_URL"), "SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL", default=None
        )
        store_key = _first_env(
            _k("STORE_KEY"), "SUPABASE_ANON_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY", default=None
        )
        store_timeout_seconds = _env_float(_k("STORE_TIMEOUT_SECONDS"), 10.0)

        # A random key keeps sessions working for a single process run; set one to survive restarts.
        secret_key = _first_env(_k("SECRET_KEY"), default=None) or secrets.token_hex(32)
        host = _env(_k("HOST"), "127.0.0.1")
        port = _env_int(_k("PORT"), 5001)
        debug = _env_bool(_k("DEBUG"), False)

        completed_by_labels = _env_list(_k("COMPLETED_BY_LABELS"), DEFAULT_COMPLETED_BY_LABELS)
        completed_by_default = _env(_k("COMPLETED_BY_DEFAULT"), "Team").strip()
        if completed_by_default not in completed_by_labels:
            completed_by_default = completed_by_labels[-1] if completed_by_labels else ""

        mobile_breakpoint_px = _env_int(_k("MOBILE_BREAKPOINT_PX"), 768)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            store_url=store_url.strip().rstrip("/") if store_url else None,
            store_key=store_key.strip() if store_key else None,
            store_timeout_seconds=store_timeout_seconds,
            secret_key=secret_key,
            host=host,
            port=port,
            debug=debug,
            completed_by_labels=completed_by_labels,
            completed_by_default=completed_by_default,
            mobile_breakpoint_px=mobile_breakpoint_px,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
