"""Attendance state rules.

Pure functions over plain data: no clock reads, no database access. Services
load the rows and pass in the current time; these functions decide what the
rows mean and what should be written next.
"""
from __future__ import annotations

from datetime import datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..core.constants import WORK_START_TIME
from ..core.enums import TodayStatus
from ..core.exceptions import DuplicateRecordError, InvalidDurationError, NoActiveCheckInError
from .factory import CheckInStrategyFactory
from .model import AttendanceRecord, CheckInDraft, CheckOutUpdate

_HOURS_QUANTUM = Decimal("0.01")
_SECONDS_PER_HOUR = Decimal(3600)


def resolve_today_status(record: Optional[AttendanceRecord]) -> TodayStatus:
    if record is None:
        return TodayStatus.NOT_CHECKED_IN
    if record.check_out_time is None:
        return TodayStatus.CHECKED_IN
    return TodayStatus.CHECKED_OUT


def compute_hours_worked(check_in: datetime, check_out: datetime) -> Decimal:
    """Elapsed hours rounded half-up to two decimals.

    Raises InvalidDurationError when check_out precedes check_in.
    """

    delta = check_out - check_in
    if delta < timedelta(0):
        raise InvalidDurationError(
            f"Check-out {check_out.isoformat()} is before check-in {check_in.isoformat()}"
        )
    seconds = Decimal(delta.days * 86400 + delta.seconds) + Decimal(delta.microseconds) / Decimal(1_000_000)
    return (seconds / _SECONDS_PER_HOUR).quantize(_HOURS_QUANTUM, rounding=ROUND_HALF_UP)


def evaluate_check_in(
    user_id: int,
    now: datetime,
    *,
    existing: Optional[AttendanceRecord] = None,
    work_start: time = WORK_START_TIME,
) -> CheckInDraft:
    if existing is not None:
        raise DuplicateRecordError(f"Already checked in on {existing.work_date.isoformat()}")

    strategy = CheckInStrategyFactory(work_start=work_start).for_checkin(now=now)
    decision = strategy.decide(now=now, work_start=work_start)
    return CheckInDraft(
        user_id=user_id,
        work_date=now.date(),
        check_in_time=now,
        status=decision.status,
    )


def evaluate_check_out(record: Optional[AttendanceRecord], now: datetime) -> CheckOutUpdate:
    if record is None:
        raise NoActiveCheckInError("You have not checked in today")
    if record.check_out_time is not None:
        raise NoActiveCheckInError("You have already checked out today")

    return CheckOutUpdate(
        attendance_id=record.attendance_id,
        check_out_time=now,
        total_hours=compute_hours_worked(record.check_in_time, now),
    )
