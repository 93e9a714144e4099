from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest

from attendance_tracker.attendance.model import AttendanceRecord, AttendanceWithUser, CheckInDraft, CheckOutUpdate
from attendance_tracker.core.enums import AttendanceStatus, Role
from attendance_tracker.core.exceptions import AccessDeniedError, DuplicateRecordError
from attendance_tracker.users.model import CallerContext, User


class InMemoryUsers:
    def __init__(self, users: list[User] | None = None):
        self.users_by_id: dict[int, User] = {u.user_id: u for u in users or []}
        self._id = max(self.users_by_id, default=0)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users_by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users_by_id.values() if u.email == email), None)

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        return next((u for u in self.users_by_id.values() if u.employee_id == employee_id), None)

    def create_user(self, *, email, name, password_hash, role, employee_id, department) -> int:
        self._id += 1
        self.users_by_id[self._id] = User(
            user_id=self._id,
            email=email,
            name=name,
            password_hash=password_hash,
            role=role,
            employee_id=employee_id,
            department=department,
        )
        return self._id

    def get_visible(self, caller: CallerContext, user_id: int) -> Optional[User]:
        return self.get_by_id(user_id) if caller.may_access(user_id) else None

    def list_employees(self, caller: CallerContext):
        return [
            u
            for u in self.users_by_id.values()
            if u.role.is_on_roster and caller.may_access(u.user_id)
        ]


class InMemoryAttendance:
    """Mirrors the store contract: unique (user, date), scoped reads, owner-only writes."""

    def __init__(self, users: InMemoryUsers | None = None):
        self._users = users or InMemoryUsers()
        self._by_user_date: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        self._by_user_date[(record.user_id, record.work_date)] = record
        self._id = max(self._id, record.attendance_id)
        return record

    def _visible(self, caller: CallerContext):
        return [r for r in self._by_user_date.values() if caller.may_access(r.user_id)]

    def get_for_user_and_date(self, caller, user_id, work_date):
        rec = self._by_user_date.get((user_id, work_date))
        return rec if rec and caller.may_access(rec.user_id) else None

    def list_for_user_between(self, caller, user_id, start_date, end_date):
        items = [r for r in self._visible(caller) if r.user_id == user_id and start_date <= r.work_date <= end_date]
        return sorted(items, key=lambda r: r.work_date, reverse=True)

    def get_recent_for_user(self, caller, user_id, limit):
        items = [r for r in self._visible(caller) if r.user_id == user_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def list_between(self, caller, start_date, end_date):
        items = [r for r in self._visible(caller) if start_date <= r.work_date <= end_date]
        return sorted(items, key=lambda r: r.work_date)

    def list_recent_with_users(self, caller, limit):
        items = sorted(self._visible(caller), key=lambda r: r.work_date, reverse=True)[:limit]
        return [AttendanceWithUser(record=r, user=self._users.get_by_id(r.user_id)) for r in items]

    def create_checkin(self, caller: CallerContext, draft: CheckInDraft) -> int:
        if caller.user_id != draft.user_id:
            raise AccessDeniedError("You can only record your own attendance")
        if (draft.user_id, draft.work_date) in self._by_user_date:
            raise DuplicateRecordError("duplicate")
        self._id += 1
        self._by_user_date[(draft.user_id, draft.work_date)] = AttendanceRecord(
            attendance_id=self._id,
            user_id=draft.user_id,
            work_date=draft.work_date,
            check_in_time=draft.check_in_time,
            check_out_time=None,
            status=draft.status,
        )
        return self._id

    def update_checkout(self, caller: CallerContext, update: CheckOutUpdate) -> bool:
        for key, rec in self._by_user_date.items():
            if rec.attendance_id == update.attendance_id and rec.user_id == caller.user_id and rec.check_out_time is None:
                self._by_user_date[key] = AttendanceRecord(
                    attendance_id=rec.attendance_id,
                    user_id=rec.user_id,
                    work_date=rec.work_date,
                    check_in_time=rec.check_in_time,
                    check_out_time=update.check_out_time,
                    status=rec.status,
                    total_hours=update.total_hours,
                )
                return True
        return False


def make_user(user_id: int, *, role: Role = Role.EMPLOYEE, department: str = "Engineering", name: str | None = None) -> User:
    return User(
        user_id=user_id,
        email=f"user{user_id}@example.com",
        name=name or f"User {user_id}",
        role=role,
        employee_id=f"EMP{user_id:03d}",
        department=department,
    )


def make_record(
    attendance_id: int,
    user_id: int,
    work_date: date,
    status: AttendanceStatus = AttendanceStatus.PRESENT,
    *,
    check_in: datetime | None = None,
    check_out: datetime | None = None,
    hours: str | None = None,
) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=attendance_id,
        user_id=user_id,
        work_date=work_date,
        check_in_time=check_in or datetime.combine(work_date, datetime.min.time()).replace(hour=8, minute=50),
        check_out_time=check_out,
        status=status,
        total_hours=Decimal(hours) if hours is not None else None,
    )


@pytest.fixture
def today() -> date:
    return date(2026, 3, 18)


@pytest.fixture
def manager() -> User:
    return make_user(100, role=Role.MANAGER, department="Management", name="Mona Manager")


@pytest.fixture
def roster() -> list[User]:
    return [
        make_user(1, department="Engineering"),
        make_user(2, department="Engineering"),
        make_user(3, department="Sales"),
        make_user(4, department="Sales"),
        make_user(5, department="Support"),
    ]


@pytest.fixture
def users_repo(roster, manager) -> InMemoryUsers:
    return InMemoryUsers([*roster, manager])


@pytest.fixture
def attendance_repo(users_repo) -> InMemoryAttendance:
    return InMemoryAttendance(users_repo)


@pytest.fixture
def employee_caller() -> CallerContext:
    return CallerContext(user_id=1, role=Role.EMPLOYEE)


@pytest.fixture
def manager_caller(manager) -> CallerContext:
    return CallerContext.for_user(manager)
