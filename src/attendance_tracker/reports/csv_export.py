from __future__ import annotations

import csv
import io
from datetime import date, datetime
from typing import Iterable, Optional

from ..attendance.model import AttendanceWithUser
from ..core.constants import MISSING_VALUE

HEADER = ["Date", "Employee ID", "Employee Name", "Department", "Check In", "Check Out", "Hours", "Status"]
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _fmt_dt(value: Optional[datetime]) -> str:
    return value.strftime(DATETIME_FORMAT) if value else MISSING_VALUE


def export_csv(records: Iterable[AttendanceWithUser]) -> str:
    """Render records as CSV text. Names and departments with commas or quotes are quoted."""

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(HEADER)
    for row in records:
        rec = row.record
        writer.writerow(
            [
                rec.work_date.isoformat(),
                row.user.employee_id,
                row.user.name,
                row.user.department,
                _fmt_dt(rec.check_in_time),
                _fmt_dt(rec.check_out_time),
                f"{rec.total_hours:.2f}" if rec.total_hours is not None else MISSING_VALUE,
                rec.status.value,
            ]
        )
    return out.getvalue()


def export_filename(today: date) -> str:
    return f"attendance_report_{today.isoformat()}.csv"
