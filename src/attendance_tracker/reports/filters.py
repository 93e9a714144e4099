from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..attendance.model import AttendanceWithUser
from ..core.enums import AttendanceStatus


def filter_records(
    records: Iterable[AttendanceWithUser],
    *,
    user_id: Optional[int] = None,
    work_date: Optional[date] = None,
    status: Optional[AttendanceStatus] = None,
) -> list[AttendanceWithUser]:
    """Conjunctive exact-match filter; a None criterion matches everything."""

    out = []
    for r in records:
        if user_id is not None and r.user_id != user_id:
            continue
        if work_date is not None and r.work_date != work_date:
            continue
        if status is not None and r.status != status:
            continue
        out.append(r)
    return out
