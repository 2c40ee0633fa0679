from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.exceptions import DuplicateRecordError
from .connection import DatabaseConnection

_DUP_KEY_RE = re.compile(r"for key '([^']+)'")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (connection, cursor); commit on success, roll back on any error.

    Unique-key violations are re-raised as ``DuplicateRecordError`` so that
    services never depend on driver exceptions.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except IntegrityError as e:
        conn.rollback()
        if e.errno == errorcode.ER_DUP_ENTRY:
            raise DuplicateRecordError(duplicate_key_name(e.msg)) from e
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def duplicate_key_name(message: Optional[str]) -> Optional[str]:
    """Extract the index name from a MySQL duplicate-entry message.

    MySQL 8 reports ``table.key``; older servers report just ``key``.
    """
    if not message:
        return None
    m = _DUP_KEY_RE.search(message)
    if not m:
        return None
    return m.group(1).rsplit(".", 1)[-1]


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
