from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from ..core.constants import WORK_START_TIME
from .strategies.base import CheckInStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class CheckInStrategyFactory:
    """Factory Pattern: choose the check-in strategy from the clock."""

    work_start: time = WORK_START_TIME

    def for_checkin(self, *, now: datetime) -> CheckInStrategy:
        threshold = datetime.combine(now.date(), self.work_start, tzinfo=now.tzinfo)
        if now > threshold:
            return LateStrategy()
        return PresentStrategy()
