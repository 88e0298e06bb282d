from __future__ import annotations

from datetime import date, datetime

import pytest

from clockin_crew.attendance.service import AttendanceService
from clockin_crew.core.enums import AttendanceStatus, NextAction
from clockin_crew.core.exceptions import ValidationError


@pytest.fixture
def svc(attendance_repo, profiles_repo) -> AttendanceService:
    return AttendanceService(attendance_repo, profiles_repo, cutoff_hour=9)


def test_checkin_before_cutoff_is_present(svc, attendance_repo, alice, fixed_now):
    result = svc.check_in(alice.id, now=fixed_now)

    rec = attendance_repo.get_for_user_and_date(alice.id, fixed_now.date())
    assert result.status == AttendanceStatus.PRESENT
    assert rec.status == AttendanceStatus.PRESENT
    assert rec.check_in_time == fixed_now
    assert rec.check_out_time is None


def test_checkin_during_cutoff_hour_is_present(svc, alice):
    result = svc.check_in(alice.id, now=datetime(2026, 3, 16, 9, 59, 59))

    assert result.status == AttendanceStatus.PRESENT


def test_checkin_after_cutoff_hour_is_late(svc, alice):
    result = svc.check_in(alice.id, now=datetime(2026, 3, 16, 10, 0, 0))

    assert result.status == AttendanceStatus.LATE


def test_second_checkin_same_day_is_rejected(svc, alice, fixed_now):
    svc.check_in(alice.id, now=fixed_now)

    with pytest.raises(ValidationError):
        svc.check_in(alice.id, now=fixed_now.replace(hour=11))


def test_checkin_unknown_profile_is_rejected(svc, fixed_now):
    with pytest.raises(ValidationError):
        svc.check_in("nobody", now=fixed_now)


def test_checkout_records_time_and_hours(svc, attendance_repo, alice, fixed_now):
    svc.check_in(alice.id, now=fixed_now)
    out = datetime(2026, 3, 16, 17, 15, 0)

    result = svc.check_out(alice.id, now=out)

    rec = attendance_repo.get_for_user_and_date(alice.id, fixed_now.date())
    assert rec.check_out_time == out
    assert rec.total_hours == 8.5
    assert result.total_hours == 8.5
    assert rec.status == AttendanceStatus.PRESENT


def test_checkout_without_checkin_is_rejected(svc, alice, fixed_now):
    with pytest.raises(ValidationError):
        svc.check_out(alice.id, now=fixed_now)


def test_closed_day_cannot_be_reopened(svc, alice, fixed_now):
    svc.check_in(alice.id, now=fixed_now)
    svc.check_out(alice.id, now=fixed_now.replace(hour=17))

    with pytest.raises(ValidationError):
        svc.check_out(alice.id, now=fixed_now.replace(hour=18))
    with pytest.raises(ValidationError):
        svc.check_in(alice.id, now=fixed_now.replace(hour=18))


def test_toggle_walks_open_then_closed(svc, alice, fixed_now):
    first = svc.toggle(alice.id, now=fixed_now)
    second = svc.toggle(alice.id, now=fixed_now.replace(hour=16))

    assert first.action == NextAction.CHECK_IN
    assert second.action == NextAction.CHECK_OUT
    with pytest.raises(ValidationError):
        svc.toggle(alice.id, now=fixed_now.replace(hour=17))


def test_today_state_next_action(svc, alice, fixed_now):
    today = fixed_now.date()

    assert svc.get_today_state(alice.id, today).next_action == NextAction.CHECK_IN

    svc.check_in(alice.id, now=fixed_now)
    state = svc.get_today_state(alice.id, today)
    assert state.is_checked_in is True
    assert state.next_action == NextAction.CHECK_OUT

    svc.check_out(alice.id, now=fixed_now.replace(hour=17))
    state = svc.get_today_state(alice.id, today)
    assert state.is_checked_in is False
    assert state.next_action == NextAction.DONE


def test_monthly_stats_only_use_reference_month(svc, attendance_repo, alice, bob):
    attendance_repo.add(alice.id, date(2026, 3, 2), status=AttendanceStatus.PRESENT, total_hours=8.25)
    attendance_repo.add(alice.id, date(2026, 3, 3), status=AttendanceStatus.LATE, total_hours=7.0)
    attendance_repo.add(alice.id, date(2026, 3, 4), status=AttendanceStatus.ABSENT)
    attendance_repo.add(alice.id, date(2026, 2, 27), status=AttendanceStatus.PRESENT, total_hours=9.0)
    attendance_repo.add(bob.id, date(2026, 3, 2), status=AttendanceStatus.PRESENT, total_hours=8.0)

    stats = svc.get_monthly_stats(alice.id, date(2026, 3, 16))

    assert stats.as_dict() == {"present": 1, "absent": 1, "late": 1, "total_hours": 15.3}


def test_recent_ui_is_newest_first_and_limited(attendance_repo, profiles_repo, alice):
    svc = AttendanceService(attendance_repo, profiles_repo, recent_limit=2)
    attendance_repo.add(alice.id, date(2026, 3, 2), check_in=datetime(2026, 3, 2, 9, 5), total_hours=8.0)
    attendance_repo.add(alice.id, date(2026, 3, 3), status=AttendanceStatus.LATE, check_in=datetime(2026, 3, 3, 10, 30))
    attendance_repo.add(alice.id, date(2026, 3, 4), check_in=datetime(2026, 3, 4, 8, 0), total_hours=7.96)

    rows = svc.get_recent_ui(alice.id)

    assert [r["date"] for r in rows] == ["2026-03-04", "2026-03-03"]
    assert rows[0]["day"] == "Wednesday, Mar 4"
    assert rows[0]["check_in"] == "8:00 AM"
    assert rows[0]["total_hours"] == "8.0"
    assert rows[1]["status_label"] == "Late"
    assert rows[1]["total_hours"] is None


def test_month_history_selects_day_and_groups_statuses(svc, attendance_repo, alice):
    attendance_repo.add(alice.id, date(2026, 3, 2), status=AttendanceStatus.PRESENT)
    attendance_repo.add(alice.id, date(2026, 3, 3), status=AttendanceStatus.LATE)
    attendance_repo.add(alice.id, date(2026, 3, 4), status=AttendanceStatus.HALF_DAY)
    attendance_repo.add(alice.id, date(2026, 4, 1), status=AttendanceStatus.PRESENT)

    history = svc.get_month_history(alice.id, date(2026, 3, 3))

    assert [r.date.day for r in history.records] == [4, 3, 2]
    assert history.selected.status == AttendanceStatus.LATE
    assert history.highlights == {"present": ["2026-03-02"], "late": ["2026-03-03"], "absent": []}


def test_month_history_without_record_for_selected_day(svc, alice):
    history = svc.get_month_history(alice.id, date(2026, 3, 10))

    assert history.records == []
    assert history.selected is None


def test_dashboard_payload(svc, alice, fixed_now):
    svc.check_in(alice.id, now=fixed_now)

    data = svc.build_dashboard(alice.id, fixed_now.date())

    assert data["profile"] == {"name": "Alice Adams", "employee_id": "EMP001", "department": "Engineering"}
    assert data["today"]["is_checked_in"] is True
    assert data["today"]["next_action"] == "check_out"
    assert data["monthly_stats"]["present"] == 1
    assert len(data["recent"]) == 1
