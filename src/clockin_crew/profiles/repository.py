from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Profile


class ProfileRepository(Protocol):
    """Repository interface for profiles.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Profile]:
        raise NotImplementedError
