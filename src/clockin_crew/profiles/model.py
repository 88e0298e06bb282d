from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """Domain entity: an employee profile.

    Profiles are provisioned outside this service; here they are read-only.
    """

    id: str
    name: str
    employee_id: str
    department: Optional[str]
    role: Role
