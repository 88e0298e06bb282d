from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (user, date)."""

    id: int
    user_id: str
    date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    total_hours: Optional[float] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model: a record joined with its owner's profile (team views, CSV export)."""

    id: int
    user_id: str
    date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    total_hours: Optional[float]
    name: Optional[str]
    employee_id: Optional[str]
    department: Optional[str]
    created_at: Optional[datetime] = None
