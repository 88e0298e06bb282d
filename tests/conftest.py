from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from clockin_crew.attendance.model import AttendanceRecord, AttendanceReportRow
from clockin_crew.container import build_services
from clockin_crew.core.enums import AttendanceStatus, Role
from clockin_crew.profiles.model import Profile


class InMemoryProfiles:
    def __init__(self, profiles: list[Profile]):
        self._by_id = {p.id: p for p in profiles}

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        return self._by_id.get(profile_id)

    def get_by_employee_id(self, employee_id: str) -> Optional[Profile]:
        return next((p for p in self._by_id.values() if p.employee_id == employee_id), None)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda p: p.name)


class InMemoryAttendance:
    def __init__(self, profiles: InMemoryProfiles):
        self._profiles = profiles
        self._by_user_date: dict[tuple[str, date], AttendanceRecord] = {}
        self._id = 0

    def add(
        self,
        user_id: str,
        day: date,
        *,
        status: AttendanceStatus = AttendanceStatus.PRESENT,
        check_in: Optional[datetime] = None,
        check_out: Optional[datetime] = None,
        total_hours: Optional[float] = None,
    ) -> AttendanceRecord:
        self._id += 1
        rec = AttendanceRecord(
            id=self._id,
            user_id=user_id,
            date=day,
            check_in_time=check_in,
            check_out_time=check_out,
            status=status,
            total_hours=total_hours,
            created_at=check_in or datetime.combine(day, datetime.min.time()),
        )
        self._by_user_date[(user_id, day)] = rec
        return rec

    def get_for_user_and_date(self, user_id: str, day: date) -> Optional[AttendanceRecord]:
        return self._by_user_date.get((user_id, day))

    def get_recent_for_user(self, user_id: str, limit: int):
        items = [r for r in self._by_user_date.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.date, reverse=True)
        return items[:limit]

    def get_for_user_between(self, user_id: str, start: date, end: date):
        items = [r for r in self._by_user_date.values() if r.user_id == user_id and start <= r.date <= end]
        items.sort(key=lambda r: r.date, reverse=True)
        return items

    def create_checkin(self, *, user_id: str, day: date, check_in_time: datetime, status: AttendanceStatus) -> int:
        return self.add(user_id, day, status=status, check_in=check_in_time).id

    def update_checkout(self, *, attendance_id: int, check_out_time: datetime, total_hours) -> bool:
        for key, rec in list(self._by_user_date.items()):
            if rec.id == attendance_id and rec.check_out_time is None:
                self._by_user_date[key] = replace(rec, check_out_time=check_out_time, total_hours=total_hours)
                return True
        return False

    def _join(self, rec: AttendanceRecord) -> AttendanceReportRow:
        p = self._profiles.get_by_id(rec.user_id)
        return AttendanceReportRow(
            id=rec.id,
            user_id=rec.user_id,
            date=rec.date,
            check_in_time=rec.check_in_time,
            check_out_time=rec.check_out_time,
            status=rec.status,
            total_hours=rec.total_hours,
            name=p.name if p else None,
            employee_id=p.employee_id if p else None,
            department=p.department if p else None,
            created_at=rec.created_at,
        )

    def get_joined_for_date(self, day: date):
        items = [r for r in self._by_user_date.values() if r.date == day]
        items.sort(key=lambda r: (r.created_at, r.id), reverse=True)
        return [self._join(r) for r in items]

    def get_report_rows(self, *, start_date: date, end_date: date):
        items = [r for r in self._by_user_date.values() if start_date <= r.date <= end_date]
        items.sort(key=lambda r: r.date, reverse=True)
        return [self._join(r) for r in items]


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 16, 8, 45, 0)


@pytest.fixture
def manager() -> Profile:
    return Profile(id="m-1", name="Maya Manager", employee_id="MGR001", department="Operations", role=Role.MANAGER)


@pytest.fixture
def alice() -> Profile:
    return Profile(id="e-1", name="Alice Adams", employee_id="EMP001", department="Engineering", role=Role.EMPLOYEE)


@pytest.fixture
def bob() -> Profile:
    return Profile(id="e-2", name="Bob Brown", employee_id="EMP002", department="Support", role=Role.EMPLOYEE)


@pytest.fixture
def profiles_repo(manager, alice, bob) -> InMemoryProfiles:
    return InMemoryProfiles([manager, alice, bob])


@pytest.fixture
def attendance_repo(profiles_repo) -> InMemoryAttendance:
    return InMemoryAttendance(profiles_repo)


@pytest.fixture
def container(profiles_repo, attendance_repo):
    return build_services(profiles_repo=profiles_repo, attendance_repo=attendance_repo)
