"""
Shift earnings calculation for ShiftCalc application.

Converts a worked time interval plus a job's rate configuration into a
categorized pay breakdown:
- regular hours up to the job's overtime threshold
- overtime hours beyond it
- Shabbat hours (whole shift, decided by the start instant)
- night bonus for hours between 22:00 and 06:00, on top of regular/overtime
- a daily transport allowance

The functions here are pure; they never touch the database.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import List

from core.constants import (
    CURRENCY_SYMBOL,
    LABEL_REGULAR_HOURS,
    LABEL_OVERTIME_HOURS,
    LABEL_SHABBAT_HOURS,
    LABEL_NIGHT_HOURS,
    LABEL_TRANSPORT,
    TRANSPORT_REFERENCE_MINIMUM_WAGE,
    TRANSPORT_WAGE_SHARE,
    TRANSPORT_WORK_DAYS_PER_MONTH,
    TRANSPORT_DAILY_FLOOR,
)
from core.models import Job, ShiftCalculation
from core.time_utils import (
    shift_interval,
    hours_between,
    overlap_hours,
    night_window,
    is_shabbat_start,
)

logger = logging.getLogger(__name__)


def calculate_night_hours(start: datetime, end: datetime) -> float:
    """
    Hours of the shift that fall inside the night window.

    The window is 22:00 on the shift's start date until 06:00 the next day,
    so the result is never more than 8.
    """
    window_start, window_end = night_window(start)
    return overlap_hours(start, end, window_start, window_end)


def calculate_transport_cost(job: Job) -> float:
    """
    Daily transport allowance for one shift.

    With auto_transport the statutory formula applies: 7.5% of the monthly
    minimum wage spread over 22 work days, never below 30 per day.
    Otherwise the job's flat transport cost is used as is.
    """
    if not job.auto_transport:
        return job.transport_cost
    daily_share = (TRANSPORT_REFERENCE_MINIMUM_WAGE * TRANSPORT_WAGE_SHARE) / TRANSPORT_WORK_DAYS_PER_MONTH
    return max(TRANSPORT_DAILY_FLOOR, daily_share)


def _money(value: float) -> str:
    return f"{CURRENCY_SYMBOL}{value:.2f}"


def _percent(value: float) -> str:
    """25.0 -> '25', 12.5 -> '12.5', 1000000.0 -> '1000000'."""
    return f"{value:f}".rstrip("0").rstrip(".")


def build_breakdown(calc: ShiftCalculation, night_shift_bonus: float) -> List[str]:
    """
    Human readable line items, one per non-zero component.

    Order is fixed: regular, overtime, Shabbat, night bonus, transport.
    """
    lines: List[str] = []
    if calc.base_hours > 0:
        lines.append(f"{calc.base_hours:.1f} {LABEL_REGULAR_HOURS}: {_money(calc.base_earnings)}")
    if calc.overtime_hours > 0:
        lines.append(f"{calc.overtime_hours:.1f} {LABEL_OVERTIME_HOURS}: {_money(calc.overtime_earnings)}")
    if calc.shabbat_hours > 0:
        lines.append(f"{calc.shabbat_hours:.1f} {LABEL_SHABBAT_HOURS}: {_money(calc.shabbat_earnings)}")
    if calc.night_hours > 0:
        lines.append(
            f"{calc.night_hours:.1f} {LABEL_NIGHT_HOURS} (+{_percent(night_shift_bonus)}%): "
            f"{_money(calc.night_bonus)}"
        )
    if calc.transport_cost > 0:
        lines.append(f"{LABEL_TRANSPORT}: {_money(calc.transport_cost)}")
    return lines


def calculate_shift_earnings(
    start_time: str,
    end_time: str,
    shift_date: str | date,
    job: Job,
) -> ShiftCalculation:
    """
    Calculate the pay breakdown of a single shift.

    Args:
        start_time: Shift start, 'HH:MM' local time
        end_time: Shift end, 'HH:MM' local time; earlier than start means next day
        shift_date: Calendar day the shift starts on ('YYYY-MM-DD' or date)
        job: Rate configuration

    Returns:
        ShiftCalculation with hours and earnings per category, transport,
        the unrounded total and the breakdown lines.

    Both times must be present; callers validate before calling.
    """
    start, end = shift_interval(shift_date, start_time, end_time)
    total_hours = hours_between(start, end)

    base_hours = 0.0
    overtime_hours = 0.0
    shabbat_hours = 0.0
    night_hours = 0.0

    if is_shabbat_start(start):
        # כל המשמרת בתעריף שבת, ללא תוספת לילה
        shabbat_hours = total_hours
    else:
        base_hours = min(total_hours, job.overtime_after)
        overtime_hours = max(0.0, total_hours - job.overtime_after)
        # תוספת לילה נספרת מעל שעות רגילות/נוספות, לא במקומן
        night_hours = calculate_night_hours(start, end)

    transport_cost = calculate_transport_cost(job)

    base_earnings = base_hours * job.base_rate
    overtime_earnings = overtime_hours * job.overtime_rate
    shabbat_earnings = shabbat_hours * job.shabbat_rate
    night_bonus = night_hours * job.base_rate * (job.night_shift_bonus / 100)

    total_earnings = base_earnings + overtime_earnings + shabbat_earnings + night_bonus + transport_cost

    calc = ShiftCalculation(
        base_hours=base_hours,
        overtime_hours=overtime_hours,
        shabbat_hours=shabbat_hours,
        night_hours=night_hours,
        transport_cost=transport_cost,
        base_earnings=base_earnings,
        overtime_earnings=overtime_earnings,
        shabbat_earnings=shabbat_earnings,
        night_bonus=night_bonus,
        total_earnings=total_earnings,
        total_hours=total_hours,
    )
    breakdown = build_breakdown(calc, job.night_shift_bonus)

    logger.debug(
        f"Shift {start:%Y-%m-%d %H:%M}-{end:%H:%M}: {total_hours:.2f}h, "
        f"shabbat={shabbat_hours > 0}, total={total_earnings:.2f}"
    )

    return replace(calc, breakdown=breakdown)
