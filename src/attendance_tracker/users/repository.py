from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import CallerContext, User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    Reads that take a caller are scoped: own row, or every row for managers.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        email: str,
        name: str,
        password_hash: str,
        role: Role,
        employee_id: str,
        department: str,
    ) -> int:
        raise NotImplementedError

    def get_visible(self, caller: CallerContext, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def list_employees(self, caller: CallerContext) -> Sequence[User]:
        raise NotImplementedError
