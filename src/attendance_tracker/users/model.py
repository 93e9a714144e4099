from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object (no DB access code).
    """

    user_id: int
    email: str
    name: str
    role: Role
    employee_id: str
    department: str
    password_hash: str = ""
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class CallerContext:
    """Identity of whoever is making the call.

    Passed explicitly into every service and repository method that touches
    scoped rows; there is no ambient "current user".
    """

    user_id: int
    role: Role

    @classmethod
    def for_user(cls, user: User) -> "CallerContext":
        return cls(user_id=user.user_id, role=user.role)

    def may_access(self, owner_id: int) -> bool:
        return self.role.can_view_all or self.user_id == owner_id
