from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import IntegrityError

from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import CallerContext, User
from .repository import UserRepository

_COLUMNS = "user_id, email, name, password_hash, role, employee_id, department, created_at"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        email=row["email"],
        name=row["name"],
        password_hash=row.get("password_hash") or "",
        role=Role(row["role"]),
        employee_id=row["employee_id"],
        department=row["department"],
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, params: tuple) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {where}", params)
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("user_id=%s", (int(user_id),))

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email=%s", (email,))

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        return self._get_one("employee_id=%s", (employee_id,))

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(email, name, password_hash, role, employee_id, department)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (email, name, password_hash, role.value, employee_id, department),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ValidationError("Email or employee ID is already registered") from e
            raise

    def get_visible(self, caller: CallerContext, user_id: int) -> Optional[User]:
        if not caller.may_access(user_id):
            return None
        return self.get_by_id(user_id)

    def list_employees(self, caller: CallerContext) -> Sequence[User]:
        roster_roles = [r.value for r in Role if r.is_on_roster]
        where = f"role IN ({', '.join(['%s'] * len(roster_roles))})"
        params: list[object] = list(roster_roles)
        if not caller.role.can_view_all:
            where += " AND user_id=%s"
            params.append(caller.user_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {where} ORDER BY name ASC", tuple(params))
            return [_to_user(r) for r in fetchall(cur)]
