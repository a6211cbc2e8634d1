# src/taskdeck/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

One Settings object for the whole app. Every variable uses the TASKDECK_
prefix; nothing is required at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKDECK"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


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

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    state_db_path: Path
    state_key: str

    # ---- Calendar ----
    week_starts_on: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskdeck") or "taskdeck"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskdeck"))
        state_db_path = _env_path(_k("STATE_DB_PATH"), data_dir / "state.sqlite3")
        state_key = _env(_k("STATE_KEY"), "taskdeck-data").strip() or "taskdeck-data"

        # 0 = Monday ... 6 = Sunday, same as datetime.weekday()
        week_starts_on = _env_int(_k("WEEK_STARTS_ON"), 0)
        if not 0 <= week_starts_on <= 6:
            week_starts_on = 0

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            state_db_path=state_db_path,
            state_key=state_key,
            week_starts_on=week_starts_on,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
