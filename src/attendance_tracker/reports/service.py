from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceWithUser
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local, trailing_days
from ..core.constants import BROWSER_LIMIT, TREND_DAYS
from ..core.enums import AttendanceStatus
from ..core.exceptions import AccessDeniedError
from ..users.model import CallerContext, User
from ..users.repository import UserRepository
from .aggregators import DailyRollup, DayTrend, DepartmentStat, department_breakdown, summarize_day, weekly_trend
from .csv_export import export_csv, export_filename
from .filters import filter_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManagerDashboard:
    today: date
    daily: DailyRollup
    weekly: list[DayTrend]
    departments: list[DepartmentStat]


class ManagerReportService:
    """Manager-only views: dashboard, record browser, CSV export."""

    def __init__(self, attendance: AttendanceRepository, users: UserRepository, *, browser_limit: int = BROWSER_LIMIT):
        self._attendance = attendance
        self._users = users
        self._browser_limit = int(browser_limit)

    def _require_manager(self, caller: CallerContext) -> None:
        if not caller.role.can_view_all:
            logger.warning("User %s (%s) denied manager view", caller.user_id, caller.role.value)
            raise AccessDeniedError("Manager access required")

    def list_employees(self, caller: CallerContext) -> Sequence[User]:
        self._require_manager(caller)
        return self._users.list_employees(caller)

    def dashboard(self, caller: CallerContext, *, today: date | None = None) -> ManagerDashboard:
        self._require_manager(caller)
        today = today or now_local().date()

        roster = self._users.list_employees(caller)
        days = trailing_days(today, TREND_DAYS)
        week_records = self._attendance.list_between(caller, days[0], today)
        today_records = [r for r in week_records if r.work_date == today]

        return ManagerDashboard(
            today=today,
            daily=summarize_day(roster, today_records),
            weekly=weekly_trend(week_records, days),
            departments=department_breakdown(roster, today_records),
        )

    def browse(
        self,
        caller: CallerContext,
        *,
        user_id: Optional[int] = None,
        work_date: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> list[AttendanceWithUser]:
        self._require_manager(caller)
        recent = self._attendance.list_recent_with_users(caller, self._browser_limit)
        return filter_records(recent, user_id=user_id, work_date=work_date, status=status)

    def export(
        self,
        caller: CallerContext,
        *,
        user_id: Optional[int] = None,
        work_date: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
        today: date | None = None,
    ) -> tuple[str, str]:
        rows = self.browse(caller, user_id=user_id, work_date=work_date, status=status)
        today = today or now_local().date()
        logger.info("User %s exported %d attendance rows", caller.user_id, len(rows))
        return export_filename(today), export_csv(rows)
