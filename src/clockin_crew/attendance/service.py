from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_date, month_bounds, now_local
from ..core.constants import DEFAULT_RECENT_LIMIT, LATE_CUTOFF_HOUR
from ..core.enums import AttendanceStatus, NextAction
from ..core.exceptions import ValidationError
from ..profiles.repository import ProfileRepository
from .aggregator import (
    MonthlyStats,
    classify_check_in,
    compute_monthly_stats,
    compute_worked_hours,
    derive_checked_in_state,
)
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.LATE: "Late",
    AttendanceStatus.ABSENT: "Absent",
    AttendanceStatus.HALF_DAY: "Half Day",
}

STATUS_CSS = {
    AttendanceStatus.PRESENT: "bg-success",
    AttendanceStatus.LATE: "bg-warning text-dark",
    AttendanceStatus.ABSENT: "bg-danger",
    AttendanceStatus.HALF_DAY: "bg-warning text-dark",
}


@dataclass(frozen=True)
class TodayState:
    record: Optional[AttendanceRecord]
    is_checked_in: bool
    next_action: NextAction


@dataclass(frozen=True)
class ActionResult:
    action: NextAction
    status: AttendanceStatus
    at: datetime
    total_hours: Optional[float] = None


@dataclass(frozen=True)
class MonthHistory:
    records: list[AttendanceRecord]
    selected: Optional[AttendanceRecord]
    highlights: dict[str, list[str]]


def _fmt_clock(value: Optional[datetime]) -> Optional[str]:
    # 12-hour clock without a leading zero, e.g. "9:05 AM".
    if value is None:
        return None
    return value.strftime("%I:%M %p").lstrip("0")


def record_to_ui(r: AttendanceRecord) -> dict:
    return {
        "id": r.id,
        "date": format_date(r.date),
        "day": r.date.strftime("%A, %b %d").replace(" 0", " "),
        "check_in": _fmt_clock(r.check_in_time),
        "check_out": _fmt_clock(r.check_out_time),
        "status": r.status.value,
        "status_label": STATUS_LABELS.get(r.status, r.status.value),
        "css_class": STATUS_CSS.get(r.status, "bg-secondary"),
        "total_hours": f"{r.total_hours:.1f}" if r.total_hours and r.total_hours > 0 else None,
    }


class AttendanceService:
    """Use cases for a single employee's attendance."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        profiles: ProfileRepository,
        *,
        cutoff_hour: int = LATE_CUTOFF_HOUR,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
    ):
        self._attendance = attendance
        self._profiles = profiles
        self._cutoff_hour = int(cutoff_hour)
        self._recent_limit = int(recent_limit)

    def check_in(self, user_id: str, *, now: datetime | None = None) -> ActionResult:
        now = now or now_local()
        today = now.date()

        if not self._profiles.get_by_id(user_id):
            raise ValidationError("Employee profile not found")

        if self._attendance.get_for_user_and_date(user_id, today):
            raise ValidationError("You have already checked in today")

        status = classify_check_in(now.hour, cutoff_hour=self._cutoff_hour)
        self._attendance.create_checkin(user_id=user_id, day=today, check_in_time=now, status=status)
        logger.info("[attendance] %s checked in at %s as %s", user_id, now.isoformat(), status.value)
        return ActionResult(action=NextAction.CHECK_IN, status=status, at=now)

    def check_out(self, user_id: str, *, now: datetime | None = None) -> ActionResult:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record or record.check_in_time is None:
            raise ValidationError("You have not checked in today")
        if record.check_out_time is not None:
            raise ValidationError("You have already checked out today")

        hours = compute_worked_hours(record.check_in_time, now)
        if not self._attendance.update_checkout(attendance_id=record.id, check_out_time=now, total_hours=hours):
            raise ValidationError("Check-out could not be recorded")

        logger.info("[attendance] %s checked out at %s (%s h)", user_id, now.isoformat(), hours)
        return ActionResult(action=NextAction.CHECK_OUT, status=record.status, at=now, total_hours=hours)

    def toggle(self, user_id: str, *, now: datetime | None = None) -> ActionResult:
        """Perform whichever action today's record allows next."""
        now = now or now_local()
        state = self.get_today_state(user_id, now.date())
        if state.next_action == NextAction.CHECK_OUT:
            return self.check_out(user_id, now=now)
        if state.next_action == NextAction.DONE:
            raise ValidationError("Attendance is already completed for today")
        return self.check_in(user_id, now=now)

    def get_today_record(self, user_id: str, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(user_id, today)

    def get_today_state(self, user_id: str, today: date) -> TodayState:
        record = self.get_today_record(user_id, today)
        checked_in = derive_checked_in_state(record)
        if record is None:
            action = NextAction.CHECK_IN
        elif checked_in:
            action = NextAction.CHECK_OUT
        else:
            action = NextAction.DONE
        return TodayState(record=record, is_checked_in=checked_in, next_action=action)

    def get_monthly_stats(self, user_id: str, reference: date) -> MonthlyStats:
        start, end = month_bounds(reference)
        return compute_monthly_stats(self._attendance.get_for_user_between(user_id, start, end))

    def get_recent_ui(self, user_id: str, *, limit: int | None = None) -> list[dict]:
        rows = self._attendance.get_recent_for_user(user_id, limit or self._recent_limit)
        return [record_to_ui(r) for r in rows]

    def get_month_history(self, user_id: str, selected: date) -> MonthHistory:
        start, end = month_bounds(selected)
        records = list(self._attendance.get_for_user_between(user_id, start, end))
        picked = next((r for r in records if r.date == selected), None)

        highlights: dict[str, list[str]] = {
            AttendanceStatus.PRESENT.value: [],
            AttendanceStatus.LATE.value: [],
            AttendanceStatus.ABSENT.value: [],
        }
        for r in records:
            if r.status.value in highlights:
                highlights[r.status.value].append(format_date(r.date))

        return MonthHistory(records=records, selected=picked, highlights=highlights)

    def build_dashboard(self, user_id: str, today: date) -> dict:
        profile = self._profiles.get_by_id(user_id)
        if not profile:
            raise ValidationError("Employee profile not found")

        state = self.get_today_state(user_id, today)
        return {
            "profile": {
                "name": profile.name,
                "employee_id": profile.employee_id,
                "department": profile.department,
            },
            "today": {
                "date": format_date(today),
                "record": record_to_ui(state.record) if state.record else None,
                "is_checked_in": state.is_checked_in,
                "next_action": state.next_action.value,
            },
            "monthly_stats": self.get_monthly_stats(user_id, today).as_dict(),
            "recent": self.get_recent_ui(user_id),
        }
