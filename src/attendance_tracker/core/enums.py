from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role. Closed set: every permission check goes through the properties below."""

    EMPLOYEE = "employee"
    MANAGER = "manager"

    @property
    def can_view_all(self) -> bool:
        """Managers read every user and attendance row; employees only their own."""
        return self is Role.MANAGER

    @property
    def is_on_roster(self) -> bool:
        return self is Role.EMPLOYEE


class AttendanceStatus(str, Enum):
    """Attendance status stored in the database."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"

    @property
    def counts_as_present(self) -> bool:
        return self in (AttendanceStatus.PRESENT, AttendanceStatus.LATE)


class TodayStatus(str, Enum):
    """Derived state of a user's current day."""

    NOT_CHECKED_IN = "not-checked-in"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
