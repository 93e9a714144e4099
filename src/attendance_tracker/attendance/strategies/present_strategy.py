from __future__ import annotations

from datetime import datetime, time

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy, StatusDecision


class PresentStrategy(CheckInStrategy):
    """Check-in at or before the start of the work day."""

    def decide(self, *, now: datetime, work_start: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
