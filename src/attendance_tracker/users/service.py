from __future__ import annotations

import logging

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_all_present, require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AccessDeniedError, AuthenticationError, ValidationError
from .model import CallerContext, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use cases: sign up, sign in, read own profile."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(
        self,
        *,
        email: str,
        password: str,
        name: str,
        employee_id: str,
        department: str,
        role: Role | str = Role.EMPLOYEE,
    ) -> User:
        require_all_present(name=name, employee_id=employee_id, department=department)
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        try:
            role = Role(role)
        except ValueError as e:
            raise ValidationError("Role must be employee or manager") from e

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")
        employee_id = require_non_empty(employee_id, "Employee ID")
        if self._users.get_by_employee_id(employee_id):
            raise ValidationError("Employee ID is already registered")

        user_id = self._users.create_user(
            email=email,
            name=name.strip(),
            password_hash=generate_password_hash(password),
            role=role,
            employee_id=employee_id,
            department=department.strip(),
        )
        logger.info("Registered %s %s (%s)", role.value, employee_id, email)

        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("Registration failed")
        return user

    def authenticate(self, email: str, password: str) -> CallerContext:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.password_hash:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # unknown hash method, e.g. a placeholder value
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")
        return CallerContext.for_user(user)

    def get_profile(self, caller: CallerContext) -> User:
        user = self._users.get_visible(caller, caller.user_id)
        if not user:
            raise AccessDeniedError("Profile is not available")
        return user
