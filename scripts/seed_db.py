"""Create (or reset) the bootstrap admin account.

Usage: ADMIN_EMAIL=... ADMIN_PASSWORD=... python scripts/seed_db.py
"""
from __future__ import annotations

import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from dotenv import load_dotenv

from attendance_tracker.config import load_settings
from attendance_tracker.database.bootstrap import ensure_admin_user
from attendance_tracker.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))

    email = os.getenv("ADMIN_EMAIL", "admin@example.com")
    password = os.getenv("ADMIN_PASSWORD")
    if not password:
        raise SystemExit("Set ADMIN_PASSWORD to seed the admin account.")

    ensure_admin_user(conn, email=email, password=password)
    print(f"OK: Admin {email} ready -> {conn.describe()}")


if __name__ == "__main__":
    main()
