from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_date, normalize_decimal
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_RECORD_COLUMNS = "a.id, a.user_id, a.date, a.check_in_time, a.check_out_time, a.status, a.total_hours, a.created_at"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        user_id=str(r["user_id"]),
        date=normalize_date(r["date"]),
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        total_hours=normalize_decimal(r.get("total_hours")),
        created_at=r.get("created_at"),
    )


def _to_report_row(r: dict) -> AttendanceReportRow:
    return AttendanceReportRow(
        id=int(r["id"]),
        user_id=str(r["user_id"]),
        date=normalize_date(r["date"]),
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        total_hours=normalize_decimal(r.get("total_hours")),
        name=r.get("name"),
        employee_id=r.get("employee_id"),
        department=r.get("department"),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: str, day: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance a
                WHERE a.user_id=%s AND a.date=%s
                """,
                (user_id, day),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance a
                WHERE a.user_id=%s
                ORDER BY a.date DESC
                LIMIT %s
                """,
                (user_id, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_user_between(self, user_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance a
                WHERE a.user_id=%s AND a.date BETWEEN %s AND %s
                ORDER BY a.date DESC
                """,
                (user_id, start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        user_id: str,
        day: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(user_id, date, check_in_time, status)
                VALUES(%s,%s,%s,%s)
                """,
                (user_id, day, check_in_time, status.value),
            )
            return int(cur.lastrowid)

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        total_hours: Optional[float],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out_time=%s, total_hours=%s
                WHERE id=%s AND check_out_time IS NULL
                """,
                (check_out_time, total_hours, int(attendance_id)),
            )
            return cur.rowcount > 0

    def get_joined_for_date(self, day: date) -> Sequence[AttendanceReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}, p.name, p.employee_id, p.department
                FROM attendance a
                LEFT JOIN profiles p ON p.id = a.user_id
                WHERE a.date=%s
                ORDER BY a.created_at DESC, a.id DESC
                """,
                (day,),
            )
            return [_to_report_row(r) for r in fetchall(cur)]

    def get_report_rows(self, *, start_date: date, end_date: date) -> Sequence[AttendanceReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}, p.name, p.employee_id, p.department
                FROM attendance a
                LEFT JOIN profiles p ON p.id = a.user_id
                WHERE a.date BETWEEN %s AND %s
                ORDER BY a.date DESC
                """,
                (start_date, end_date),
            )
            return [_to_report_row(r) for r in fetchall(cur)]
