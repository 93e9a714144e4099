from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import month_window, now_local
from ..core.constants import MISSING_VALUE, RECENT_HISTORY_LIMIT, WORK_START_TIME
from ..core.enums import TodayStatus
from ..core.exceptions import NoActiveCheckInError
from ..reports.aggregators import MonthlySummary, summarize_month
from ..users.model import CallerContext
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .rules import evaluate_check_in, evaluate_check_out, resolve_today_status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryRow:
    work_date: str
    check_in: str
    check_out: str
    hours: str
    status: str


@dataclass(frozen=True)
class EmployeeDashboard:
    today_status: TodayStatus
    today_record: Optional[AttendanceRecord]
    monthly: MonthlySummary
    recent: list[HistoryRow] = field(default_factory=list)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, *, work_start: time = WORK_START_TIME):
        self._attendance = attendance
        self._work_start = work_start

    def get_today_record(self, caller: CallerContext, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(caller, caller.user_id, today)

    def check_in(self, caller: CallerContext, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        existing = self.get_today_record(caller, now.date())
        draft = evaluate_check_in(caller.user_id, now, existing=existing, work_start=self._work_start)

        attendance_id = self._attendance.create_checkin(caller, draft)
        logger.info("User %s checked in at %s (%s)", caller.user_id, now.isoformat(), draft.status.value)
        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=draft.user_id,
            work_date=draft.work_date,
            check_in_time=draft.check_in_time,
            check_out_time=None,
            status=draft.status,
        )

    def check_out(self, caller: CallerContext, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        record = self.get_today_record(caller, now.date())
        update = evaluate_check_out(record, now)

        if not self._attendance.update_checkout(caller, update):
            # Lost a race with another check-out of the same row.
            raise NoActiveCheckInError("You have already checked out today")

        logger.info("User %s checked out at %s (%s h)", caller.user_id, now.isoformat(), update.total_hours)
        return AttendanceRecord(
            attendance_id=record.attendance_id,
            user_id=record.user_id,
            work_date=record.work_date,
            check_in_time=record.check_in_time,
            check_out_time=update.check_out_time,
            status=record.status,
            total_hours=update.total_hours,
            created_at=record.created_at,
        )

    def employee_dashboard(self, caller: CallerContext, *, today: date | None = None) -> EmployeeDashboard:
        today = today or now_local().date()
        today_record = self.get_today_record(caller, today)

        start, end = month_window(today)
        monthly = self._attendance.list_for_user_between(caller, caller.user_id, start, end)
        recent = self._attendance.get_recent_for_user(caller, caller.user_id, RECENT_HISTORY_LIMIT)

        return EmployeeDashboard(
            today_status=resolve_today_status(today_record),
            today_record=today_record,
            monthly=summarize_month(monthly),
            recent=[self._to_history_row(r) for r in recent],
        )

    def _to_history_row(self, r: AttendanceRecord) -> HistoryRow:
        return HistoryRow(
            work_date=r.work_date.strftime("%Y-%m-%d"),
            check_in=r.check_in_time.strftime("%H:%M:%S"),
            check_out=r.check_out_time.strftime("%H:%M:%S") if r.check_out_time else MISSING_VALUE,
            hours=f"{r.total_hours:.2f}h" if r.total_hours else MISSING_VALUE,
            status=r.status.value,
        )
