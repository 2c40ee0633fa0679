from __future__ import annotations

import importlib
import os
from types import ModuleType
from urllib.parse import unquote, urlparse


def get_settings_module() -> str:
    # APP_ENV selects the settings module; development is the default.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return f"{__name__}.production"

    if env in {"test", "testing"}:
        return f"{__name__}.testing"

    return f"{__name__}.development"


def load_settings() -> ModuleType:
    return importlib.import_module(get_settings_module())


def db_config_from_env(*, default_password: str = "") -> dict:
    """Build the mysql-connector kwargs from DATABASE_URL or the DB_* variables.

    DATABASE_URL takes precedence, e.g. ``mysql://user:secret@db:3306/attendance_db``.
    """
    url = os.getenv("DATABASE_URL")
    if url:
        parsed = urlparse(url)
        return {
            "host": parsed.hostname or "localhost",
            "port": int(parsed.port or 3306),
            "user": unquote(parsed.username or "root"),
            "password": unquote(parsed.password or ""),
            "database": parsed.path.lstrip("/") or "attendance_db",
        }

    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "attendance_db"),
    }
