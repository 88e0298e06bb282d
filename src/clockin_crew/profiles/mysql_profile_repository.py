from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Profile
from .repository import ProfileRepository


def _to_profile(row: dict) -> Profile:
    return Profile(
        id=str(row["id"]),
        name=row["name"],
        employee_id=row["employee_id"],
        department=row.get("department"),
        role=Role(row["role"]),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, employee_id, department, role
                FROM profiles
                WHERE id=%s
                """,
                (profile_id,),
            )
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def get_by_employee_id(self, employee_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, employee_id, department, role
                FROM profiles
                WHERE employee_id=%s
                """,
                (employee_id,),
            )
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def list_all(self) -> Sequence[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, employee_id, department, role
                FROM profiles
                ORDER BY name ASC
                """
            )
            return [_to_profile(r) for r in fetchall(cur)]
