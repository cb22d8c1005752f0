"""
Utility functions for ShiftCalc application.
Contains helper functions for formatting and date ranges.
"""
from __future__ import annotations

from datetime import date
from typing import Tuple


def format_currency(value: float | int | None) -> str:
    """Format number as currency with thousand separators (e.g., 11403.00 -> 11,403.00)."""
    if value is None:
        value = 0
    return f"{float(value):,.2f}"


def month_range(year: int, month: int) -> Tuple[date, date]:
    """Return (first day of month, first day of next month)."""
    start = date(year, month, 1)
    if month == 12:
        end = date(year + 1, 1, 1)
    else:
        end = date(year, month + 1, 1)
    return start, end
