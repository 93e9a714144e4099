from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from attendance_tracker.common.datetime_utils import month_window, trailing_days
from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.reports.aggregators import (
    department_breakdown,
    summarize_day,
    summarize_month,
    weekly_trend,
)

from conftest import make_record

TODAY = date(2026, 3, 18)


def test_month_window_starts_on_first():
    assert month_window(TODAY) == (date(2026, 3, 1), TODAY)


def test_monthly_counts_only_supplied_records():
    records = [
        make_record(1, 1, date(2026, 3, 2), AttendanceStatus.PRESENT, hours="8.00"),
        make_record(2, 1, date(2026, 3, 3), AttendanceStatus.LATE, hours="7.25"),
        make_record(3, 1, date(2026, 3, 4), AttendanceStatus.ABSENT),
        make_record(4, 1, date(2026, 3, 5), AttendanceStatus.HALF_DAY, hours="4.00"),
        make_record(5, 1, date(2026, 3, 6), AttendanceStatus.PRESENT),
    ]

    summary = summarize_month(records)

    assert (summary.present, summary.absent, summary.late) == (2, 1, 1)
    assert summary.present + summary.absent + summary.late <= len(records)
    assert summary.total_hours == Decimal("19.25")


def test_monthly_empty():
    summary = summarize_month([])
    assert (summary.present, summary.absent, summary.late, summary.total_hours) == (0, 0, 0, Decimal("0"))


def test_roster_day_two_present_one_late(roster):
    records = [
        make_record(1, 1, TODAY, AttendanceStatus.PRESENT),
        make_record(2, 2, TODAY, AttendanceStatus.PRESENT),
        make_record(3, 3, TODAY, AttendanceStatus.LATE),
    ]

    rollup = summarize_day(roster, records)

    assert rollup.total_employees == 5
    assert (rollup.present, rollup.late, rollup.absent) == (2, 1, 2)
    assert [u.user_id for u in rollup.absent_employees] == [4, 5]
    assert rollup.attendance_rate == 60.0


def test_roster_day_explicit_absent_and_half_day_fall_into_absent(roster):
    records = [
        make_record(1, 1, TODAY, AttendanceStatus.ABSENT),
        make_record(2, 2, TODAY, AttendanceStatus.HALF_DAY),
        make_record(3, 3, TODAY, AttendanceStatus.PRESENT),
    ]

    rollup = summarize_day(roster, records)

    assert rollup.absent == 4
    # only users with no row at all are listed
    assert [u.user_id for u in rollup.absent_employees] == [4, 5]


def test_roster_day_empty_roster_has_zero_rate():
    rollup = summarize_day([], [])
    assert rollup.total_employees == 0
    assert rollup.absent == 0
    assert rollup.attendance_rate == 0.0


def test_weekly_trend_always_seven_days_in_order():
    days = trailing_days(TODAY, 7)
    records = [
        make_record(1, 1, TODAY, AttendanceStatus.PRESENT),
        make_record(2, 2, TODAY, AttendanceStatus.LATE),
        make_record(3, 3, TODAY, AttendanceStatus.ABSENT),
        make_record(4, 1, TODAY - timedelta(days=6), AttendanceStatus.HALF_DAY),
        # outside the window: ignored
        make_record(5, 1, TODAY - timedelta(days=7), AttendanceStatus.PRESENT),
    ]

    trend = weekly_trend(records, days)

    assert len(trend) == 7
    assert [t.day for t in trend] == sorted(t.day for t in trend)
    assert trend[0].day == date(2026, 3, 12)
    assert (trend[0].present, trend[0].absent) == (0, 1)
    assert (trend[-1].present, trend[-1].absent) == (2, 1)
    assert all((t.present, t.absent) == (0, 0) for t in trend[1:-1])
    assert trend[-1].label == "Wed"


def test_weekly_trend_no_records():
    trend = weekly_trend([], trailing_days(TODAY, 7))
    assert [(t.present, t.absent) for t in trend] == [(0, 0)] * 7


def test_department_breakdown(roster):
    records = [
        make_record(1, 1, TODAY, AttendanceStatus.PRESENT),
        make_record(2, 3, TODAY, AttendanceStatus.LATE),
        make_record(3, 4, TODAY, AttendanceStatus.ABSENT),
    ]

    stats = department_breakdown(roster, records)

    assert [(s.department, s.present, s.total) for s in stats] == [
        ("Engineering", 1, 2),
        ("Sales", 1, 2),
        ("Support", 0, 1),
    ]
    assert sum(s.total for s in stats) == len(roster)
    assert all(s.present <= s.total for s in stats)
    assert stats[0].ratio == 0.5


def test_department_breakdown_ignores_records_of_non_roster_users(roster):
    stats = department_breakdown(roster, [make_record(1, 999, TODAY)])
    assert sum(s.present for s in stats) == 0


def test_roster_day_ignores_records_of_non_roster_users(roster):
    records = [make_record(i, i, TODAY, AttendanceStatus.PRESENT) for i in range(1, 6)]
    records.append(make_record(6, 100, TODAY, AttendanceStatus.PRESENT))
    records.append(make_record(7, 999, TODAY, AttendanceStatus.LATE))

    rollup = summarize_day(roster, records)

    assert (rollup.present, rollup.late, rollup.absent) == (5, 0, 0)
    assert rollup.absent >= 0
    assert rollup.present + rollup.late <= rollup.total_employees
    assert rollup.attendance_rate == 100.0
