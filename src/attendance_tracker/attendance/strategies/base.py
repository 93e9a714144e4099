from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, time

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus


class CheckInStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide the status written at check-in."""

    @abstractmethod
    def decide(self, *, now: datetime, work_start: time) -> StatusDecision:
        raise NotImplementedError
