from __future__ import annotations

from flask import Flask, jsonify, request

from ..attendance.controller import record_to_dict
from ..attendance.model import AttendanceWithUser
from ..common.datetime_utils import parse_iso_date
from ..common.web import current_caller, login_required
from ..container import Container
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..users.controller import user_to_dict


def _read_filters() -> dict:
    """Parse ?employee=&date=&status= into browse() keyword arguments; blanks mean no filter."""

    employee = (request.args.get("employee") or "").strip()
    day = (request.args.get("date") or "").strip()
    status = (request.args.get("status") or "").strip()

    try:
        return {
            "user_id": int(employee) if employee else None,
            "work_date": parse_iso_date(day) if day else None,
            "status": AttendanceStatus(status) if status else None,
        }
    except ValueError as e:
        raise ValidationError(f"Invalid filter: {e}") from e


def _row_to_dict(row: AttendanceWithUser) -> dict:
    out = record_to_dict(row.record)
    out["user"] = user_to_dict(row.user)
    return out


def register(app: Flask, container: Container) -> None:
    @app.route("/api/manager/dashboard", methods=["GET"], endpoint="manager_dashboard")
    @login_required
    def manager_dashboard():
        dash = container.report_service.dashboard(current_caller())
        return jsonify(
            {
                "date": dash.today.isoformat(),
                "total_employees": dash.daily.total_employees,
                "today_present": dash.daily.present,
                "today_late": dash.daily.late,
                "today_absent": dash.daily.absent,
                "attendance_rate": dash.daily.attendance_rate,
                "absent_employees_today": [user_to_dict(u) for u in dash.daily.absent_employees],
                "weekly_attendance": [
                    {"date": d.day.isoformat(), "day": d.label, "present": d.present, "absent": d.absent}
                    for d in dash.weekly
                ],
                "department_stats": [
                    {"department": s.department, "present": s.present, "total": s.total} for s in dash.departments
                ],
            }
        )

    @app.route("/api/manager/employees", methods=["GET"], endpoint="manager_employees")
    @login_required
    def manager_employees():
        employees = container.report_service.list_employees(current_caller())
        return jsonify([user_to_dict(u) for u in employees])

    @app.route("/api/manager/records", methods=["GET"], endpoint="manager_records")
    @login_required
    def manager_records():
        rows = container.report_service.browse(current_caller(), **_read_filters())
        return jsonify([_row_to_dict(r) for r in rows])

    @app.route("/api/manager/records.csv", methods=["GET"], endpoint="manager_records_csv")
    @login_required
    def manager_records_csv():
        filename, content = container.report_service.export(current_caller(), **_read_filters())
        return app.response_class(
            content.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
