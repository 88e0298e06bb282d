from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_RECENT_LIMIT, LATE_CUTOFF_HOUR
from .database.connection import DBConfig, DatabaseConnection
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.repository import ProfileRepository
from .profiles.service import ProfileService
from .reports.service import ReportService
from .team.service import TeamService


@dataclass(frozen=True)
class Container:
    profiles_repo: ProfileRepository
    attendance_repo: AttendanceRepository

    profile_service: ProfileService
    attendance_service: AttendanceService
    team_service: TeamService
    report_service: ReportService


def build_services(
    *,
    profiles_repo: ProfileRepository,
    attendance_repo: AttendanceRepository,
    cutoff_hour: int = LATE_CUTOFF_HOUR,
    recent_limit: int = DEFAULT_RECENT_LIMIT,
) -> Container:
    return Container(
        profiles_repo=profiles_repo,
        attendance_repo=attendance_repo,
        profile_service=ProfileService(profiles_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            profiles_repo,
            cutoff_hour=cutoff_hour,
            recent_limit=recent_limit,
        ),
        team_service=TeamService(attendance_repo, profiles_repo),
        report_service=ReportService(attendance_repo),
    )


def build_container(
    *,
    db_config: dict,
    cutoff_hour: int = LATE_CUTOFF_HOUR,
    recent_limit: int = DEFAULT_RECENT_LIMIT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        profiles_repo=MySQLProfileRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        cutoff_hour=cutoff_hour,
        recent_limit=recent_limit,
    )
