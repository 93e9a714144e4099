from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..users.model import CallerContext
from .model import AttendanceRecord, AttendanceWithUser, CheckInDraft, CheckOutUpdate


class AttendanceRepository(Protocol):
    """Row store for attendance.

    Every method takes the caller: reads return only rows the caller may see
    (own rows, or all rows for managers); writes are accepted only on the
    caller's own rows and raise AccessDeniedError otherwise.
    """

    def get_for_user_and_date(self, caller: CallerContext, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user_between(
        self, caller: CallerContext, user_id: int, start_date: date, end_date: date
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_user(self, caller: CallerContext, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_between(self, caller: CallerContext, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_recent_with_users(self, caller: CallerContext, limit: int) -> Sequence[AttendanceWithUser]:
        raise NotImplementedError

    def create_checkin(self, caller: CallerContext, draft: CheckInDraft) -> int:
        """Insert; raises DuplicateRecordError on the (user_id, work_date) constraint."""

        raise NotImplementedError

    def update_checkout(self, caller: CallerContext, update: CheckOutUpdate) -> bool:
        raise NotImplementedError
