from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role stored on a profile; decides which dashboard is served."""

    EMPLOYEE = "employee"
    MANAGER = "manager"


class AttendanceStatus(str, Enum):
    """Day classification stored on an attendance row."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    HALF_DAY = "half-day"


class NextAction(str, Enum):
    """What the employee can do next for today's record."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
    DONE = "done"
