from __future__ import annotations

from datetime import datetime

import pytest
from werkzeug.security import generate_password_hash

from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.core.enums import AttendanceStatus, Role
from attendance_tracker.reports.exporter import XLSX_MIMETYPE
from tests.fakes import make_user


def _register(client, email="budi@example.com", name="Budi Santoso"):
    resp = client.post(
        "/auth/register",
        json={"name": name, "email": email, "password": "rahasia123", "department": "Engineering"},
    )
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_token(users_repo, container):
    users_repo.add(
        make_user(
            50,
            employee_id="ADM0001",
            email="admin@example.com",
            role=Role.ADMIN,
            password_hash=generate_password_hash("admin123"),
        )
    )
    return container.tokens.issue(50)


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"success": True, "status": "ok"}


def test_register_returns_employee_id_and_token(client):
    body = _register(client)

    assert body["success"] is True
    assert body["user"]["employeeId"].startswith("EMP")
    assert body["message"] == f"Registration successful! Your Employee ID: {body['user']['employeeId']}"
    assert "password" not in body["user"] and "passwordHash" not in body["user"]
    assert body["token"]


def test_register_missing_fields(client):
    resp = client.post("/auth/register", json={"name": "Budi"})

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "All fields are required"}


def test_register_duplicate_email_is_conflict(client):
    _register(client)
    resp = client.post(
        "/auth/register",
        json={"name": "Other", "email": "BUDI@example.com", "password": "rahasia123", "department": "Ops"},
    )

    assert resp.status_code == 409
    assert resp.get_json()["success"] is False
    assert "token" not in resp.get_json()


def test_login_and_verify(client):
    _register(client)

    resp = client.post("/auth/login", json={"email": "budi@example.com", "password": "rahasia123"})
    assert resp.status_code == 200
    token = resp.get_json()["token"]

    verify = client.get("/auth/verify", headers=_auth(token))
    assert verify.status_code == 200
    assert verify.get_json()["user"]["email"] == "budi@example.com"


def test_login_wrong_password(client):
    _register(client)

    resp = client.post("/auth/login", json={"email": "budi@example.com", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Invalid email or password"}


def test_verify_without_token(client):
    resp = client.get("/auth/verify")

    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Token not found"


def test_attendance_requires_token(client):
    resp = client.get("/attendance")

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Access denied. Token required."}


def test_attendance_rejects_bad_token(client):
    resp = client.get("/attendance", headers=_auth("garbage"))

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_check_in_then_check_out_flow(client):
    reg = _register(client)
    emp = reg["user"]["employeeId"]
    headers = _auth(reg["token"])

    checkin = client.post(
        "/attendance/checkin",
        json={"employeeId": emp, "employeeName": "Budi Santoso", "notes": "WFO"},
        headers=headers,
    )
    assert checkin.status_code == 201
    data = checkin.get_json()["data"]
    assert data["status"] == "checked-in"
    assert data["checkOutTime"] is None

    again = client.post(
        "/attendance/checkin",
        json={"employeeId": emp, "employeeName": "Budi Santoso"},
        headers=headers,
    )
    assert again.status_code == 409
    assert again.get_json()["message"] == "Already checked in today"

    checkout = client.post("/attendance/checkout", json={"employeeId": emp}, headers=headers)
    assert checkout.status_code == 200
    out = checkout.get_json()["data"]
    assert out["status"] == "completed"
    assert out["workingHours"] is not None

    twice = client.post("/attendance/checkout", json={"employeeId": emp}, headers=headers)
    assert twice.status_code == 409
    assert twice.get_json()["message"] == "Already checked out today"

    today = client.get("/attendance/today", headers=headers).get_json()["data"]
    assert [r["employeeId"] for r in today] == [emp]


def test_check_out_without_check_in(client):
    reg = _register(client)

    resp = client.post(
        "/attendance/checkout",
        json={"employeeId": reg["user"]["employeeId"]},
        headers=_auth(reg["token"]),
    )

    assert resp.status_code == 404
    assert resp.get_json()["message"] == "No check-in record found for today"


def test_check_in_requires_employee_fields(client):
    reg = _register(client)

    resp = client.post("/attendance/checkin", json={"employeeId": ""}, headers=_auth(reg["token"]))

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Employee ID and name are required"


def test_cannot_check_in_for_someone_else(client):
    reg = _register(client)

    resp = client.post(
        "/attendance/checkin",
        json={"employeeId": "EMP2099999", "employeeName": "Somebody"},
        headers=_auth(reg["token"]),
    )

    assert resp.status_code == 403


def test_admin_can_check_in_for_employee(client, admin_token):
    resp = client.post(
        "/attendance/checkin",
        json={"employeeId": "EMP2025001", "employeeName": "Budi Santoso"},
        headers=_auth(admin_token),
    )

    assert resp.status_code == 201


def _seed_month(attendance_repo):
    attendance_repo.put(
        AttendanceRecord(
            employee_id="EMP2025001",
            employee_name="Budi",
            date="2025-02-03",
            check_in_time=datetime(2025, 2, 3, 9, 0),
            check_out_time=datetime(2025, 2, 3, 17, 30),
            status=AttendanceStatus.COMPLETED,
            working_hours=8.5,
        )
    )
    attendance_repo.put(
        AttendanceRecord(
            employee_id="EMP2025002",
            employee_name="Sari",
            date="2025-02-04",
            check_in_time=datetime(2025, 2, 4, 8, 0),
        )
    )
    attendance_repo.put(
        AttendanceRecord(
            employee_id="EMP2025001",
            employee_name="Budi",
            date="2025-03-01",
            check_in_time=datetime(2025, 3, 1, 9, 0),
        )
    )


def test_monthly_summary(client, admin_token, attendance_repo):
    _seed_month(attendance_repo)

    resp = client.get("/attendance/summary/2/2025", headers=_auth(admin_token))

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["summary"] == {
        "totalDays": 2,
        "completedDays": 1,
        "totalWorkingHours": 8.5,
        "averageWorkingHours": "4.25",
    }
    assert [r["date"] for r in data["records"]] == ["2025-02-04", "2025-02-03"]


def test_monthly_summary_rejects_bad_month(client, admin_token):
    resp = client.get("/attendance/summary/13/2025", headers=_auth(admin_token))

    assert resp.status_code == 400


def test_date_range_requires_both_bounds(client, admin_token):
    resp = client.get("/attendance/range?startDate=2025-02-01", headers=_auth(admin_token))

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Start date and end date are required"


def test_date_range_is_inclusive(client, admin_token, attendance_repo):
    _seed_month(attendance_repo)

    resp = client.get(
        "/attendance/range?startDate=2025-02-04&endDate=2025-03-01",
        headers=_auth(admin_token),
    )

    assert [r["date"] for r in resp.get_json()["data"]] == ["2025-03-01", "2025-02-04"]


def test_list_pagination(client, admin_token, attendance_repo):
    _seed_month(attendance_repo)

    resp = client.get("/attendance?page=2&limit=2", headers=_auth(admin_token))

    body = resp.get_json()
    assert body["pagination"] == {"page": 2, "limit": 2, "total": 3, "pages": 2}
    assert [r["date"] for r in body["data"]] == ["2025-02-03"]


def test_export_returns_workbook(client, admin_token, attendance_repo):
    _seed_month(attendance_repo)

    resp = client.get("/attendance/export", headers=_auth(admin_token))

    assert resp.status_code == 200
    assert resp.mimetype == XLSX_MIMETYPE
    assert "attendance_report_" in resp.headers["Content-Disposition"]
    assert resp.data[:2] == b"PK"


def test_profile_get_and_update(client):
    reg = _register(client)
    headers = _auth(reg["token"])

    profile = client.get("/auth/profile", headers=headers).get_json()["user"]
    assert profile["isActive"] is True

    resp = client.put("/auth/profile", json={"department": "Finance"}, headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["user"]["department"] == "Finance"


def test_admin_deactivates_user_and_token_stops_working(client, admin_token):
    reg = _register(client)
    emp = reg["user"]["employeeId"]

    resp = client.patch(f"/auth/users/{emp}/active", json={"active": False}, headers=_auth(admin_token))
    assert resp.status_code == 200
    assert resp.get_json()["user"]["isActive"] is False

    assert client.get("/attendance", headers=_auth(reg["token"])).status_code == 401


def test_non_admin_cannot_toggle_accounts(client):
    reg = _register(client)

    resp = client.patch(
        f"/auth/users/{reg['user']['employeeId']}/active",
        json={"active": False},
        headers=_auth(reg["token"]),
    )

    assert resp.status_code == 403


def test_unknown_route_is_json_404(client):
    resp = client.get("/nope")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


@pytest.mark.parametrize("path", ["/auth/register", "/auth/login"])
@pytest.mark.parametrize("body", [["x"], "budi@example.com", 42])
def test_non_object_json_body_is_rejected(client, path, body):
    resp = client.post(path, json=body)

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "Request body must be a JSON object"}


def test_non_object_check_in_body_is_rejected(client, admin_token):
    resp = client.post("/attendance/checkin", json=[{"employeeId": "EMP2025001"}], headers=_auth(admin_token))

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Request body must be a JSON object"


def test_date_range_accepts_unpadded_dates(client, admin_token, attendance_repo):
    attendance_repo.put(
        AttendanceRecord(
            employee_id="EMP2025001",
            employee_name="Budi",
            date="2025-01-15",
            check_in_time=datetime(2025, 1, 15, 9, 0),
        )
    )

    resp = client.get("/attendance/range?startDate=2025-1-1&endDate=2025-1-31", headers=_auth(admin_token))

    assert resp.status_code == 200
    assert [r["date"] for r in resp.get_json()["data"]] == ["2025-01-15"]


def test_empty_month_summary_reports_integer_zero_hours(client, admin_token):
    resp = client.get("/attendance/summary/11/2025", headers=_auth(admin_token))

    summary = resp.get_json()["data"]["summary"]
    assert summary == {"totalDays": 0, "completedDays": 0, "totalWorkingHours": 0, "averageWorkingHours": "0.00"}
    assert isinstance(summary["totalWorkingHours"], int)


def test_check_out_response_carries_check_out_as_updated_at(client):
    reg = _register(client)
    emp = reg["user"]["employeeId"]
    headers = _auth(reg["token"])
    client.post("/attendance/checkin", json={"employeeId": emp, "employeeName": "Budi Santoso"}, headers=headers)

    data = client.post("/attendance/checkout", json={"employeeId": emp}, headers=headers).get_json()["data"]

    assert data["updatedAt"] == data["checkOutTime"]
