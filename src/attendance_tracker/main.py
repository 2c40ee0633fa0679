from __future__ import annotations

import logging
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.http import ok, register_error_handlers
from .config import get_settings_module, load_settings
from .container import Container, build_container
from .database.bootstrap import apply_schema
from .logger import setup_logging
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(*, settings: Optional[ModuleType] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    settings = settings or load_settings()

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))

    app = Flask(__name__)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    # Selfie payloads travel as base64 strings inside JSON.
    app.config["MAX_CONTENT_LENGTH"] = 16 * 1024 * 1024

    if container is None:
        container = build_container(db_config=getattr(settings, "DB_CONFIG"), jwt_secret=getattr(settings, "JWT_SECRET"))
        logger.info("settings=%s db=%s", getattr(settings, "__name__", get_settings_module()), container.conn.describe())
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)

    app.extensions["container"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return ok(status="ok")

    return app


def run() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    app = create_app(settings=settings)
    app.run(host="0.0.0.0", port=int(getattr(settings, "PORT", 5000)), debug=bool(getattr(settings, "DEBUG", False)))


if __name__ == "__main__":
    run()
