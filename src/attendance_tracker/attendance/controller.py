from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify

from ..common.web import current_caller, login_required
from ..container import Container
from .model import AttendanceRecord


def record_to_dict(r: Optional[AttendanceRecord]) -> Optional[dict]:
    if r is None:
        return None
    return {
        "id": r.attendance_id,
        "user_id": r.user_id,
        "date": r.work_date.isoformat(),
        "check_in_time": r.check_in_time.isoformat(),
        "check_out_time": r.check_out_time.isoformat() if r.check_out_time else None,
        "status": r.status.value,
        "total_hours": float(r.total_hours) if r.total_hours is not None else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        dash = container.attendance_service.employee_dashboard(current_caller())
        return jsonify(
            {
                "today_status": dash.today_status.value,
                "today_attendance": record_to_dict(dash.today_record),
                "monthly_present": dash.monthly.present,
                "monthly_absent": dash.monthly.absent,
                "monthly_late": dash.monthly.late,
                "total_hours_this_month": float(dash.monthly.total_hours),
                "recent_attendance": [
                    {
                        "date": h.work_date,
                        "check_in": h.check_in,
                        "check_out": h.check_out,
                        "hours": h.hours,
                        "status": h.status,
                    }
                    for h in dash.recent
                ],
            }
        )

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @login_required
    def attendance_check_in():
        record = container.attendance_service.check_in(current_caller())
        return jsonify({"success": True, "attendance": record_to_dict(record)}), 201

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @login_required
    def attendance_check_out():
        record = container.attendance_service.check_out(current_caller())
        return jsonify({"success": True, "attendance": record_to_dict(record)})
