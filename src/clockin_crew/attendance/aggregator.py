"""Pure attendance aggregation helpers.

Everything here works on already-fetched rows: no database access, no clock
reads. Callers scope the input (employee, date window) before calling.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..core.constants import CSV_TIMESTAMP_FORMAT, DATE_FORMAT, LATE_CUTOFF_HOUR, REPORT_HEADERS
from ..core.enums import AttendanceStatus
from ..profiles.model import Profile
from .model import AttendanceRecord, AttendanceReportRow


@dataclass(frozen=True)
class MonthlyStats:
    present: int = 0
    absent: int = 0
    late: int = 0
    total_hours: float = 0.0

    def as_dict(self) -> dict:
        return {
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "total_hours": self.total_hours,
        }


def _round_half_up(value: float, digits: int) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def classify_check_in(current_hour: int, *, cutoff_hour: int = LATE_CUTOFF_HOUR) -> AttendanceStatus:
    """``late`` strictly after the cutoff hour; the cutoff hour itself is still on time."""
    if current_hour > cutoff_hour:
        return AttendanceStatus.LATE
    return AttendanceStatus.PRESENT


def compute_monthly_stats(records: Iterable[AttendanceRecord]) -> MonthlyStats:
    """Count records per status and sum their hours.

    Only explicit ``absent`` rows are counted as absent; days without a row
    are not inferred here.
    """
    present = late = absent = 0
    total = 0.0
    for r in records:
        if r.status == AttendanceStatus.PRESENT:
            present += 1
        elif r.status == AttendanceStatus.LATE:
            late += 1
        elif r.status == AttendanceStatus.ABSENT:
            absent += 1
        total += r.total_hours or 0

    return MonthlyStats(present=present, absent=absent, late=late, total_hours=_round_half_up(total, 1))


def derive_checked_in_state(today_record: Optional[AttendanceRecord]) -> bool:
    if today_record is None:
        return False
    return today_record.check_in_time is not None and today_record.check_out_time is None


def compute_absentees(all_profiles: Sequence[Profile], today_records: Iterable[AttendanceRecord | AttendanceReportRow]) -> list[Profile]:
    """Profiles without any record for the day.

    ``all_profiles`` must be the complete team: a partial list silently
    under-reports absentees. Any record counts as attendance, half-day included.
    """
    attended = {r.user_id for r in today_records}
    return [p for p in all_profiles if p.id not in attended]


def compute_worked_hours(check_in: Optional[datetime], check_out: Optional[datetime]) -> Optional[float]:
    if check_in is None or check_out is None or check_out < check_in:
        return None
    return round((check_out - check_in).total_seconds() / 3600, 2)


def attendance_rate(present: int, total: int) -> int:
    if total <= 0:
        return 0
    return int(_round_half_up(present / total * 100, 0))


def _fmt_timestamp(value: Optional[datetime]) -> str:
    return value.strftime(CSV_TIMESTAMP_FORMAT) if value else ""


def _fmt_hours(value: Optional[float]) -> str:
    # Missing hours render as "0"; a stored zero keeps two decimals.
    if value is None:
        return "0"
    return f"{value:.2f}"


def _csv_cells(row: AttendanceReportRow) -> list[str]:
    return [
        row.date.strftime(DATE_FORMAT),
        row.name or "",
        row.employee_id or "",
        row.department or "",
        _fmt_timestamp(row.check_in_time),
        _fmt_timestamp(row.check_out_time),
        _fmt_hours(row.total_hours),
        row.status.value,
    ]


def serialize_to_csv(rows: Iterable[AttendanceReportRow]) -> str:
    """Render report rows as CSV text.

    Every data cell is wrapped in double quotes. Embedded quote characters
    are not escaped, so names containing ``"`` produce non-RFC-4180 output.
    """
    lines = [",".join(REPORT_HEADERS)]
    for row in rows:
        lines.append(",".join(f'"{cell}"' for cell in _csv_cells(row)))
    return "\n".join(lines)


def report_filename(start: date, end: date) -> str:
    return f"attendance_report_{start.strftime(DATE_FORMAT)}_to_{end.strftime(DATE_FORMAT)}.csv"
