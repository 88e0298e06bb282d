from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: str, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_between(self, user_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        """Records with ``start <= date <= end``, newest date first."""

        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: str,
        day: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> int:
        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        total_hours: Optional[float],
    ) -> bool:
        raise NotImplementedError

    def get_joined_for_date(self, day: date) -> Sequence[AttendanceReportRow]:
        """All records of a date joined with profiles, newest ``created_at`` first."""

        raise NotImplementedError

    def get_report_rows(self, *, start_date: date, end_date: date) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
