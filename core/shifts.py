"""
Shift store for ShiftCalc application.
Calculates shift earnings, stores one row per shift and aggregates monthly totals.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Iterable, List

from core.earnings import calculate_shift_earnings
from core.models import Job
from utils.error_handler import NotFoundError, safe_database_operation
from utils.utils import format_currency, month_range

logger = logging.getLogger(__name__)

SHIFT_COLUMNS = (
    "id, job_id, date, start_time, end_time, duration, base_hours, overtime_hours, "
    "shabbat_hours, night_hours, base_earnings, overtime_earnings, shabbat_earnings, "
    "night_bonus, transport_cost, earnings, breakdown"
)

# עמודות שמסוכמות בסיכום חודשי
SUMMARY_FIELDS = (
    "duration",
    "base_hours",
    "overtime_hours",
    "shabbat_hours",
    "night_hours",
    "base_earnings",
    "overtime_earnings",
    "shabbat_earnings",
    "night_bonus",
    "transport_cost",
    "earnings",
)


@safe_database_operation("record_shift")
def record_shift(conn, job: Job, shift_date: date, start_time: str, end_time: str) -> Dict[str, Any]:
    """
    Calculate a shift with the given job and store it.

    Returns:
        The stored row as a dict.
    """
    calc = calculate_shift_earnings(start_time, end_time, shift_date, job)
    row = conn.execute(
        f"""
        INSERT INTO shifts (job_id, date, start_time, end_time, duration,
                            base_hours, overtime_hours, shabbat_hours, night_hours,
                            base_earnings, overtime_earnings, shabbat_earnings, night_bonus,
                            transport_cost, earnings, breakdown)
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
        RETURNING {SHIFT_COLUMNS}
        """,
        (job.id, shift_date, start_time, end_time, calc.total_hours,
         calc.base_hours, calc.overtime_hours, calc.shabbat_hours, calc.night_hours,
         calc.base_earnings, calc.overtime_earnings, calc.shabbat_earnings, calc.night_bonus,
         calc.transport_cost, calc.total_earnings, calc.breakdown),
    ).fetchone()
    logger.info(f"Recorded shift {row['id']} on {shift_date}: ₪{format_currency(calc.total_earnings)}")
    return dict(row)


@safe_database_operation("list_shifts_for_month")
def list_shifts_for_month(conn, year: int, month: int) -> List[Dict[str, Any]]:
    """Shifts of a calendar month, newest first."""
    start, end = month_range(year, month)
    rows = conn.execute(
        f"""
        SELECT {SHIFT_COLUMNS} FROM shifts
        WHERE date >= %s AND date < %s
        ORDER BY date DESC, start_time DESC
        """,
        (start, end),
    ).fetchall()
    return [dict(r) for r in rows]


@safe_database_operation("delete_shift")
def delete_shift(conn, shift_id: int) -> None:
    cursor = conn.execute("DELETE FROM shifts WHERE id = %s", (shift_id,))
    if cursor.rowcount == 0:
        raise NotFoundError(
            f"Shift {shift_id} not found",
            details={'shift_id': shift_id},
            user_message="המשמרת לא נמצאה"
        )
    logger.info(f"Deleted shift {shift_id}")


def summarize_shifts(rows: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Sum stored shift rows into monthly totals.

    Returns:
        dict with shift_count, total_<field> for every summed column
        and average_hourly (earnings per worked hour, 0 when nothing was worked)
    """
    totals = {f"total_{name}": 0.0 for name in SUMMARY_FIELDS}
    count = 0
    for row in rows:
        count += 1
        for name in SUMMARY_FIELDS:
            totals[f"total_{name}"] += float(row.get(name) or 0)

    hours = totals["total_duration"]
    totals["shift_count"] = count
    totals["average_hourly"] = totals["total_earnings"] / hours if hours else 0.0
    return totals


def get_month_summary(conn, year: int, month: int) -> Dict[str, Any]:
    summary = summarize_shifts(list_shifts_for_month(conn, year, month))
    summary.update({"year": year, "month": month})
    return summary
