from __future__ import annotations

from datetime import date, datetime

import pytest

from clockin_crew.core.enums import AttendanceStatus
from clockin_crew.main import create_app


@pytest.fixture
def app(container, monkeypatch, fixed_now):
    for module in (
        "clockin_crew.attendance.service",
        "clockin_crew.attendance.controller",
        "clockin_crew.profiles.controller",
        "clockin_crew.team.controller",
        "clockin_crew.reports.controller",
    ):
        monkeypatch.setattr(f"{module}.now_local", lambda: fixed_now)
    return create_app(container=container, settings_module="clockin_crew.config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, employee_id: str):
    resp = client.post("/login", json={"employee_id": employee_id})
    assert resp.status_code == 200
    return resp


def test_requires_sign_in(client):
    assert client.get("/dashboard").status_code == 401
    assert client.post("/checkin").status_code == 401


def test_unknown_employee_cannot_sign_in(client):
    resp = client.post("/login", json={"employee_id": "EMP404"})

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_me_lists_role_navigation(client):
    _login(client, "EMP001")

    data = client.get("/me").get_json()

    assert data["role"] == "employee"
    assert [n["name"] for n in data["navigation"]] == ["Dashboard", "My Attendance"]


def test_employee_check_in_and_out(client):
    _login(client, "EMP001")

    first = client.post("/checkin")
    assert first.status_code == 200
    assert first.get_json()["status"] == "present"

    dup = client.post("/checkin")
    assert dup.status_code == 400

    dash = client.get("/").get_json()
    assert dash["view"] == "employee"
    assert dash["today"]["next_action"] == "check_out"

    out = client.post("/checkout")
    assert out.status_code == 200
    assert out.get_json()["action"] == "check_out"


def test_toggle_endpoint(client):
    _login(client, "EMP002")

    assert client.post("/api/checkin/toggle").get_json()["action"] == "check_in"
    assert client.post("/api/checkin/toggle").get_json()["action"] == "check_out"
    assert client.post("/api/checkin/toggle").status_code == 400


def test_history_rejects_bad_date(client):
    _login(client, "EMP001")

    assert client.get("/attendance/history?date=16-03-2026").status_code == 400
    assert client.get("/attendance/history?date=2026-03-16").status_code == 200


def test_employee_cannot_open_manager_views(client):
    _login(client, "EMP001")

    assert client.get("/manager/dashboard").status_code == 403
    assert client.get("/team/attendance").status_code == 403
    assert client.get("/reports/attendance.csv").status_code == 403


def test_manager_dashboard_via_index(client, attendance_repo, alice, fixed_now):
    attendance_repo.add(alice.id, fixed_now.date(), check_in=fixed_now)
    _login(client, "MGR001")

    data = client.get("/").get_json()

    assert data["view"] == "manager"
    assert data["total_employees"] == 3
    assert data["present_today"] == 1
    assert data["absent_today"] == 2


def test_team_attendance_filters(client, attendance_repo, alice, bob, fixed_now):
    attendance_repo.add(alice.id, fixed_now.date(), check_in=fixed_now)
    attendance_repo.add(bob.id, fixed_now.date(), status=AttendanceStatus.LATE, check_in=fixed_now.replace(hour=10))
    _login(client, "MGR001")

    data = client.get("/team/attendance?date=2026-03-16&status=late").get_json()
    assert data["count"] == 1
    assert data["records"][0]["name"] == "Bob Brown"

    assert client.get("/team/attendance?status=bogus").status_code == 400


def test_report_csv_download(client, attendance_repo, alice):
    attendance_repo.add(alice.id, date(2026, 3, 2), check_in=datetime(2026, 3, 2, 9, 0), total_hours=8.0)
    _login(client, "MGR001")

    resp = client.get("/reports/attendance.csv?start=2026-03-01&end=2026-03-16")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attendance_report_2026-03-01_to_2026-03-16.csv" in resp.headers["Content-Disposition"]
    body = resp.get_data(as_text=True)
    assert body.startswith("Date,Employee Name,Employee ID,Department,Check In,Check Out,Total Hours,Status\n")


def test_report_csv_without_data(client):
    _login(client, "MGR001")

    resp = client.get("/reports/attendance.csv?start=2026-01-01&end=2026-01-31")

    assert resp.status_code == 400
    assert "No attendance records" in resp.get_json()["message"]


def test_login_rejects_malformed_bodies(client):
    for body in (["EMP001"], "EMP001", {"employee_id": 123}):
        resp = client.post("/login", json=body)
        assert resp.status_code == 400
        assert resp.get_json()["success"] is False
