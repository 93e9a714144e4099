from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus
from ..users.model import User


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance for one day."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    total_hours: Optional[Decimal] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceWithUser:
    """Read-model for the manager record browser and CSV export."""

    record: AttendanceRecord
    user: User

    @property
    def user_id(self) -> int:
        return self.record.user_id

    @property
    def work_date(self) -> date:
        return self.record.work_date

    @property
    def status(self) -> AttendanceStatus:
        return self.record.status


@dataclass(frozen=True)
class CheckInDraft:
    """Row to insert at check-in. Status is final once written."""

    user_id: int
    work_date: date
    check_in_time: datetime
    status: AttendanceStatus


@dataclass(frozen=True)
class CheckOutUpdate:
    """Fields written at check-out; status is deliberately absent."""

    attendance_id: int
    check_out_time: datetime
    total_hours: Decimal
