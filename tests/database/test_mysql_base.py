from __future__ import annotations

import pytest
from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from attendance_tracker.core.exceptions import DuplicateRecordError
from attendance_tracker.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use
from attendance_tracker.database.mysql_base import db_cursor, duplicate_key_name


class FakeCursor:
    def __init__(self, error=None):
        self.error = error
        self.closed = False

    def execute(self, sql, params=None):
        if self.error:
            raise self.error

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, error=None):
        self.cur = FakeCursor(error)
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cur

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn):
        self.conn = conn

    def connect(self, *, with_database=True):
        return self.conn


@pytest.mark.parametrize(
    "message, expected",
    [
        ("Duplicate entry 'EMP2025001-2025-11-03' for key 'attendance_records.uq_attendance_employee_date'",
         "uq_attendance_employee_date"),
        ("Duplicate entry 'a@b.c' for key 'uq_users_email'", "uq_users_email"),
        ("something else", None),
        (None, None),
    ],
)
def test_duplicate_key_name(message, expected):
    assert duplicate_key_name(message) == expected


def test_db_cursor_commits_and_closes():
    conn = FakeConnection()

    with db_cursor(FakeFactory(conn)) as (_, cur):
        cur.execute("SELECT 1")

    assert conn.committed and conn.closed and conn.cur.closed
    assert not conn.rolled_back


def test_db_cursor_maps_duplicate_entry():
    error = IntegrityError(
        msg="Duplicate entry 'x' for key 'users.uq_users_email'",
        errno=errorcode.ER_DUP_ENTRY,
    )
    conn = FakeConnection(error)

    with pytest.raises(DuplicateRecordError) as exc:
        with db_cursor(FakeFactory(conn)) as (_, cur):
            cur.execute("INSERT ...")

    assert exc.value.key == "uq_users_email"
    assert conn.rolled_back and conn.closed
    assert not conn.committed


def test_db_cursor_reraises_other_integrity_errors():
    conn = FakeConnection(IntegrityError(msg="FK failed", errno=errorcode.ER_NO_REFERENCED_ROW_2))

    with pytest.raises(IntegrityError):
        with db_cursor(FakeFactory(conn)) as (_, cur):
            cur.execute("INSERT ...")

    assert conn.rolled_back


def test_schema_splitter_ignores_semicolons_in_strings():
    sql = _strip_create_db_and_use(
        "CREATE DATABASE IF NOT EXISTS foo;\nUSE foo;\n"
        "CREATE TABLE a (x VARCHAR(5) DEFAULT ';');\nCREATE TABLE b (y INT);"
    )

    stmts = list(_iter_sql_statements(sql))

    assert len(stmts) == 2
    assert stmts[0].endswith("DEFAULT ';')")
