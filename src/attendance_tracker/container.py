from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import WORK_START_TIME
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ManagerReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    attendance_service: AttendanceService
    report_service: ManagerReportService


def wire_services(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    conn: Optional[DatabaseConnection] = None,
    work_start: time = WORK_START_TIME,
) -> Container:
    return Container(
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo),
        attendance_service=AttendanceService(attendance_repo, work_start=work_start),
        report_service=ManagerReportService(attendance_repo, users_repo),
    )


def build_container(*, db_config: dict, work_start: time = WORK_START_TIME) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        conn=conn,
        work_start=work_start,
    )
