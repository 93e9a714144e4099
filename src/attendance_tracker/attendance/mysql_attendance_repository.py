from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from mysql.connector import IntegrityError

from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AccessDeniedError, DuplicateRecordError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, is_duplicate_key, to_decimal
from ..users.model import CallerContext, User
from .model import AttendanceRecord, AttendanceWithUser, CheckInDraft, CheckOutUpdate
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = "a.attendance_id, a.user_id, a.work_date, a.check_in_time, a.check_out_time, a.status, a.total_hours, a.created_at"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        total_hours=to_decimal(r.get("total_hours")),
        created_at=r.get("created_at"),
    )


def _scope(caller: CallerContext) -> tuple[str, list[object]]:
    """Visibility rule: own rows, or everything for roles that can view all."""

    if caller.role.can_view_all:
        return "1=1", []
    return "a.user_id=%s", [caller.user_id]


def _require_owner(caller: CallerContext, user_id: int) -> None:
    if caller.user_id != user_id:
        logger.warning("User %s tried to write attendance of user %s", caller.user_id, user_id)
        raise AccessDeniedError("You can only record your own attendance")


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, caller: CallerContext, where: str, params: list[object], *, tail: str = "") -> list[AttendanceRecord]:
        scope, scope_params = _scope(caller)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance a WHERE {scope} AND {where} {tail}",
                tuple(scope_params + params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_user_and_date(self, caller: CallerContext, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        rows = self._select(caller, "a.user_id=%s AND a.work_date=%s", [int(user_id), work_date])
        return rows[0] if rows else None

    def list_for_user_between(
        self, caller: CallerContext, user_id: int, start_date: date, end_date: date
    ) -> Sequence[AttendanceRecord]:
        return self._select(
            caller,
            "a.user_id=%s AND a.work_date BETWEEN %s AND %s",
            [int(user_id), start_date, end_date],
            tail="ORDER BY a.work_date DESC",
        )

    def get_recent_for_user(self, caller: CallerContext, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        return self._select(
            caller,
            "a.user_id=%s",
            [int(user_id)],
            tail=f"ORDER BY a.work_date DESC LIMIT {int(limit)}",
        )

    def list_between(self, caller: CallerContext, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        return self._select(
            caller,
            "a.work_date BETWEEN %s AND %s",
            [start_date, end_date],
            tail="ORDER BY a.work_date ASC",
        )

    def list_recent_with_users(self, caller: CallerContext, limit: int) -> Sequence[AttendanceWithUser]:
        scope, params = _scope(caller)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS},
                       u.email, u.name, u.role, u.employee_id, u.department
                FROM attendance a
                JOIN users u ON u.user_id = a.user_id
                WHERE {scope}
                ORDER BY a.work_date DESC, u.name ASC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            out: list[AttendanceWithUser] = []
            for r in fetchall(cur):
                user = User(
                    user_id=int(r["user_id"]),
                    email=r["email"],
                    name=r["name"],
                    role=Role(r["role"]),
                    employee_id=r["employee_id"],
                    department=r["department"],
                )
                out.append(AttendanceWithUser(record=_to_record(r), user=user))
            return out

    def create_checkin(self, caller: CallerContext, draft: CheckInDraft) -> int:
        _require_owner(caller, draft.user_id)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(user_id, work_date, check_in_time, status)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (draft.user_id, draft.work_date, draft.check_in_time, draft.status.value),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateRecordError(f"Already checked in on {draft.work_date.isoformat()}") from e
            raise

    def update_checkout(self, caller: CallerContext, update: CheckOutUpdate) -> bool:
        # Only the owner's still-open row matches, so a second concurrent check-out updates nothing.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out_time=%s, total_hours=%s
                WHERE attendance_id=%s AND user_id=%s AND check_out_time IS NULL
                """,
                (update.check_out_time, update.total_hours, int(update.attendance_id), caller.user_id),
            )
            return cur.rowcount > 0
