"""
Central constants for ShiftCalc application.
Pay-rule thresholds, statutory transport figures and breakdown labels.

This module serves as the single source of truth for constants used across:
- core/time_utils.py
- core/earnings.py
- core/models.py
"""

# =============================================================================
# Weekday indices (Python's weekday())
# =============================================================================

FRIDAY = 4
SATURDAY = 5

# =============================================================================
# Shabbat window (fixed clock thresholds, not sunset based)
# =============================================================================

# A shift starting Friday at or after 18:00, or any time on Saturday,
# is paid entirely at the Shabbat rate.
SHABBAT_FRIDAY_START_HOUR = 18

# =============================================================================
# Night window: 22:00 on the shift's start date until 06:00 the next day
# =============================================================================

NIGHT_WINDOW_START_HOUR = 22
NIGHT_WINDOW_END_HOUR = 6
NIGHT_WINDOW_HOURS = 8

# =============================================================================
# Transport allowance (צו הרחבה - החזר הוצאות נסיעה)
# =============================================================================

TRANSPORT_REFERENCE_MINIMUM_WAGE = 5300  # שכר מינימום חודשי 2024
TRANSPORT_WAGE_SHARE = 0.075             # 7.5% משכר המינימום
TRANSPORT_WORK_DAYS_PER_MONTH = 22
TRANSPORT_DAILY_FLOOR = 30.0             # מינימום ליום עבודה

# =============================================================================
# Default rates for a new job
# =============================================================================

DEFAULT_BASE_RATE = 35.0
DEFAULT_OVERTIME_RATE = 52.5        # 150% of base
DEFAULT_SHABBAT_RATE = 70.0         # 200% of base
DEFAULT_TRANSPORT_COST = 30.0
DEFAULT_OVERTIME_AFTER = 8.0
DEFAULT_NIGHT_SHIFT_BONUS = 25.0    # אחוזים

# =============================================================================
# Breakdown line labels
# =============================================================================

CURRENCY_SYMBOL = "₪"

LABEL_REGULAR_HOURS = "שעות רגילות"
LABEL_OVERTIME_HOURS = "שעות נוספות"
LABEL_SHABBAT_HOURS = "שעות שבת"
LABEL_NIGHT_HOURS = "שעות לילה"
LABEL_TRANSPORT = "נסיעה"

# =============================================================================
# Settings keys
# =============================================================================

SELECTED_JOB_SETTING = "selected_job_id"
