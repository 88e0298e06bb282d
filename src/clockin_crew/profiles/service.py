from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionProfile:
    """What we store into Flask session after sign-in."""

    profile_id: str
    name: str
    employee_id: str
    department: Optional[str]
    role: Role


@dataclass(frozen=True)
class NavItem:
    name: str
    href: str


_NAVIGATION = (
    # (item, roles that see it)
    (NavItem("Dashboard", "/"), {Role.EMPLOYEE, Role.MANAGER}),
    (NavItem("My Attendance", "/attendance/history"), {Role.EMPLOYEE}),
    (NavItem("Team Attendance", "/team/attendance"), {Role.MANAGER}),
    (NavItem("Reports", "/reports/attendance.csv"), {Role.MANAGER}),
)


def navigation_for(role: Role) -> list[NavItem]:
    return [item for item, roles in _NAVIGATION if role in roles]


def require_manager(role: Optional[str]) -> None:
    """Raise unless the session role is manager."""
    if role != Role.MANAGER.value:
        raise AuthorizationError("Managers only")


class ProfileService:
    """Use case: resolve the signed-in profile.

    Accounts are provisioned externally, so sign-in only maps an employee id
    onto an existing profile.
    """

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def sign_in(self, employee_id: str) -> SessionProfile:
        employee_id = require_non_empty(employee_id, "Employee ID")
        profile = self._profiles.get_by_employee_id(employee_id)
        if not profile:
            logger.info("[profiles] sign-in rejected for %s", employee_id)
            raise AuthenticationError("Unknown employee ID")

        return SessionProfile(
            profile_id=profile.id,
            name=profile.name,
            employee_id=profile.employee_id,
            department=profile.department,
            role=profile.role,
        )
