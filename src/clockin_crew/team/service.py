from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.aggregator import attendance_rate, compute_absentees
from ..attendance.model import AttendanceReportRow
from ..attendance.repository import AttendanceRepository
from ..attendance.service import STATUS_LABELS
from ..common.datetime_utils import format_date
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..profiles.model import Profile
from ..profiles.repository import ProfileRepository

STATUS_FILTER_ALL = "all"


@dataclass(frozen=True)
class TeamDashboard:
    total_employees: int
    present_today: int
    late_today: int
    absent_today: int
    attendance_rate: int
    today_records: list[AttendanceReportRow]
    absentees: list[Profile]


def report_row_to_ui(r: AttendanceReportRow) -> dict:
    return {
        "id": r.id,
        "user_id": r.user_id,
        "name": r.name,
        "employee_id": r.employee_id,
        "department": r.department,
        "date": format_date(r.date),
        "check_in": r.check_in_time.strftime("%H:%M") if r.check_in_time else None,
        "check_out": r.check_out_time.strftime("%H:%M") if r.check_out_time else None,
        "total_hours": f"{r.total_hours:.1f}" if r.total_hours and r.total_hours > 0 else None,
        "status": r.status.value,
        "status_label": STATUS_LABELS.get(r.status, r.status.value),
    }


def profile_to_ui(p: Profile) -> dict:
    return {
        "id": p.id,
        "name": p.name,
        "employee_id": p.employee_id,
        "department": p.department,
    }


def _parse_status_filter(value: Optional[str]) -> Optional[AttendanceStatus]:
    if not value or value == STATUS_FILTER_ALL:
        return None
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown status filter: {value}")


def _matches(row: AttendanceReportRow, needle: str) -> bool:
    for field in (row.name, row.employee_id, row.department):
        if field and needle in field.lower():
            return True
    return False


class TeamService:
    """Manager-facing views over the whole team."""

    def __init__(self, attendance: AttendanceRepository, profiles: ProfileRepository):
        self._attendance = attendance
        self._profiles = profiles

    def build_dashboard(self, today: date) -> TeamDashboard:
        profiles = list(self._profiles.list_all())
        records = list(self._attendance.get_joined_for_date(today))

        present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
        late = sum(1 for r in records if r.status == AttendanceStatus.LATE)

        return TeamDashboard(
            total_employees=len(profiles),
            present_today=present,
            late_today=late,
            # Headcount difference, matching the absentee list when every record belongs to a known profile.
            absent_today=len(profiles) - len(records),
            attendance_rate=attendance_rate(present, len(profiles)),
            today_records=records,
            absentees=compute_absentees(profiles, records),
        )

    def team_attendance(self, day: date, *, search: str = "", status: Optional[str] = STATUS_FILTER_ALL) -> list[AttendanceReportRow]:
        wanted = _parse_status_filter(status)
        rows = list(self._attendance.get_joined_for_date(day))

        needle = (search or "").strip().lower()
        if needle:
            rows = [r for r in rows if _matches(r, needle)]
        if wanted is not None:
            rows = [r for r in rows if r.status == wanted]
        return rows


def dashboard_to_ui(d: TeamDashboard) -> dict:
    return {
        "total_employees": d.total_employees,
        "present_today": d.present_today,
        "late_today": d.late_today,
        "absent_today": d.absent_today,
        "attendance_rate": d.attendance_rate,
        "today_records": [report_row_to_ui(r) for r in d.today_records],
        "absentees": [profile_to_ui(p) for p in d.absentees],
    }
