"""Rollups over attendance records.

Two notions of "absent" live here and are kept apart on purpose:
``summarize_month`` counts persisted ``absent`` rows only, while
``summarize_day`` derives absence from the roster by subtraction.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import weekday_label
from ..core.enums import AttendanceStatus
from ..users.model import User


@dataclass(frozen=True)
class MonthlySummary:
    present: int = 0
    absent: int = 0
    late: int = 0
    total_hours: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class DailyRollup:
    total_employees: int
    present: int
    late: int
    absent: int
    absent_employees: list[User] = field(default_factory=list)

    @property
    def attendance_rate(self) -> float:
        """Percentage of the roster that showed up (present or late); 0.0 for an empty roster."""
        if self.total_employees <= 0:
            return 0.0
        return round((self.present + self.late) * 100.0 / self.total_employees, 1)


@dataclass(frozen=True)
class DayTrend:
    day: date
    present: int
    absent: int

    @property
    def label(self) -> str:
        return weekday_label(self.day)


@dataclass(frozen=True)
class DepartmentStat:
    department: str
    present: int
    total: int

    @property
    def ratio(self) -> float:
        return self.present / self.total if self.total else 0.0


def summarize_month(records: Iterable[AttendanceRecord]) -> MonthlySummary:
    present = absent = late = 0
    total_hours = Decimal("0.00")
    for r in records:
        if r.status == AttendanceStatus.PRESENT:
            present += 1
        elif r.status == AttendanceStatus.ABSENT:
            absent += 1
        elif r.status == AttendanceStatus.LATE:
            late += 1
        if r.total_hours is not None:
            total_hours += r.total_hours
    return MonthlySummary(present=present, absent=absent, late=late, total_hours=total_hours)


def summarize_day(roster: Sequence[User], records: Iterable[AttendanceRecord]) -> DailyRollup:
    """Manager view of one date.

    ``absent`` is roster size minus present minus late, so explicit
    ``absent``/``half-day`` rows and missing rows land in the same bucket.
    ``absent_employees`` lists only roster members with no row at all.
    Rows of users outside the roster (a manager who checked in) are ignored.
    """

    roster_ids = {u.user_id for u in roster}
    records = [r for r in records if r.user_id in roster_ids]
    present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
    late = sum(1 for r in records if r.status == AttendanceStatus.LATE)
    seen = {r.user_id for r in records}
    return DailyRollup(
        total_employees=len(roster),
        present=present,
        late=late,
        absent=len(roster) - present - late,
        absent_employees=[u for u in roster if u.user_id not in seen],
    )


def weekly_trend(records: Iterable[AttendanceRecord], days: Sequence[date]) -> list[DayTrend]:
    counts = {d: [0, 0] for d in days}
    for r in records:
        bucket = counts.get(r.work_date)
        if bucket is None:
            continue
        if r.status.counts_as_present:
            bucket[0] += 1
        else:
            bucket[1] += 1
    return [DayTrend(day=d, present=counts[d][0], absent=counts[d][1]) for d in days]


def department_breakdown(roster: Sequence[User], records: Iterable[AttendanceRecord]) -> list[DepartmentStat]:
    status_by_user = {r.user_id: r.status for r in records}
    buckets: dict[str, list[int]] = {}
    for emp in roster:
        bucket = buckets.setdefault(emp.department, [0, 0])
        bucket[1] += 1
        status = status_by_user.get(emp.user_id)
        if status is not None and status.counts_as_present:
            bucket[0] += 1
    return [DepartmentStat(department=name, present=p, total=t) for name, (p, t) in buckets.items()]
