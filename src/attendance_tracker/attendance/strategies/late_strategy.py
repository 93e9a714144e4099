from __future__ import annotations

from datetime import datetime, time

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy, StatusDecision


class LateStrategy(CheckInStrategy):
    """Late check-in."""

    def decide(self, *, now: datetime, work_start: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)
