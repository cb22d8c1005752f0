"""
Unit tests for the shift earnings calculation.

Reference dates (2024):
    2024-01-03 Wednesday
    2024-01-05 Friday
    2024-01-06 Saturday
    2024-01-07 Sunday
"""

import unittest
import sys
import os
from datetime import date

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.earnings import (
    calculate_shift_earnings,
    calculate_night_hours,
    calculate_transport_cost,
)
from core.constants import NIGHT_WINDOW_HOURS
from core.models import Job
from core.time_utils import shift_interval

WEDNESDAY = "2024-01-03"
FRIDAY = "2024-01-05"
SATURDAY = "2024-01-06"
SUNDAY = "2024-01-07"


def make_job(**overrides) -> Job:
    values = dict(
        name="מלצרות",
        base_rate=40.0,
        overtime_rate=50.0,
        shabbat_rate=60.0,
        transport_cost=25.0,
        auto_transport=False,
        overtime_after=8.0,
        night_shift_bonus=25.0,
    )
    values.update(overrides)
    return Job(**values)


class TestRegularAndOvertime(unittest.TestCase):
    """Regular/overtime split for weekday shifts."""

    def test_ten_hour_day_shift(self):
        """10 hours with threshold 8 -> 8 regular, 2 overtime."""
        calc = calculate_shift_earnings("08:00", "18:00", WEDNESDAY, make_job())
        self.assertEqual(calc.base_hours, 8.0)
        self.assertEqual(calc.overtime_hours, 2.0)
        self.assertEqual(calc.shabbat_hours, 0.0)
        self.assertEqual(calc.night_hours, 0.0)
        self.assertEqual(calc.base_earnings, 320.0)
        self.assertEqual(calc.overtime_earnings, 100.0)
        self.assertEqual(calc.total_earnings, 320.0 + 100.0 + 25.0)

    def test_short_shift_has_no_overtime(self):
        calc = calculate_shift_earnings("09:00", "13:00", WEDNESDAY, make_job())
        self.assertEqual(calc.base_hours, 4.0)
        self.assertEqual(calc.overtime_hours, 0.0)

    def test_fractional_hours(self):
        """09:00-17:30 = 8.5 hours."""
        calc = calculate_shift_earnings("09:00", "17:30", WEDNESDAY, make_job())
        self.assertEqual(calc.total_hours, 8.5)
        self.assertEqual(calc.base_hours, 8.0)
        self.assertEqual(calc.overtime_hours, 0.5)

    def test_custom_overtime_threshold(self):
        calc = calculate_shift_earnings("08:00", "17:00", WEDNESDAY, make_job(overtime_after=7.0))
        self.assertEqual(calc.base_hours, 7.0)
        self.assertEqual(calc.overtime_hours, 2.0)

    def test_zero_length_shift(self):
        """Equal start and end is a zero-length shift, not 24 hours."""
        calc = calculate_shift_earnings("09:00", "09:00", WEDNESDAY, make_job())
        self.assertEqual(calc.total_hours, 0.0)
        self.assertEqual(calc.base_hours, 0.0)
        self.assertEqual(calc.overtime_hours, 0.0)
        self.assertEqual(calc.night_hours, 0.0)
        self.assertEqual(calc.total_earnings, 25.0)

    def test_date_object_accepted(self):
        by_str = calculate_shift_earnings("08:00", "12:00", WEDNESDAY, make_job())
        by_date = calculate_shift_earnings("08:00", "12:00", date(2024, 1, 3), make_job())
        self.assertEqual(by_str, by_date)


class TestOvernightAndNight(unittest.TestCase):
    """Midnight rollover and night window overlap."""

    def test_full_night_shift(self):
        """22:00-06:00 -> 8 elapsed hours, all of them night hours."""
        calc = calculate_shift_earnings("22:00", "06:00", WEDNESDAY, make_job())
        self.assertEqual(calc.total_hours, 8.0)
        self.assertEqual(calc.night_hours, 8.0)
        self.assertEqual(calc.base_hours, 8.0)
        self.assertEqual(calc.overtime_hours, 0.0)

    def test_night_bonus_layered_on_regular_hours(self):
        """Night hours are paid on top of regular hours, not instead of them."""
        calc = calculate_shift_earnings("22:00", "02:00", WEDNESDAY, make_job())
        self.assertEqual(calc.base_hours, 4.0)
        self.assertEqual(calc.night_hours, 4.0)
        self.assertEqual(calc.base_earnings, 160.0)
        # 4h * 40 * 25%
        self.assertEqual(calc.night_bonus, 40.0)
        self.assertEqual(calc.total_earnings, 160.0 + 40.0 + 25.0)

    def test_long_overnight_shift(self):
        """20:00-08:00 -> 12 hours: 8 regular, 4 overtime, 8 night."""
        calc = calculate_shift_earnings("20:00", "08:00", WEDNESDAY, make_job())
        self.assertEqual(calc.total_hours, 12.0)
        self.assertEqual(calc.base_hours, 8.0)
        self.assertEqual(calc.overtime_hours, 4.0)
        self.assertEqual(calc.night_hours, 8.0)

    def test_partial_overlap_evening(self):
        """18:00-23:30 overlaps the window by 1.5 hours."""
        calc = calculate_shift_earnings("18:00", "23:30", WEDNESDAY, make_job())
        self.assertEqual(calc.night_hours, 1.5)

    def test_early_morning_uses_window_after_start_date(self):
        """The window is 22:00 on the start date onward; 04:00-10:00 does not touch it."""
        calc = calculate_shift_earnings("04:00", "10:00", WEDNESDAY, make_job())
        self.assertEqual(calc.night_hours, 0.0)
        self.assertEqual(calc.night_bonus, 0.0)

    def test_zero_night_bonus_percentage(self):
        calc = calculate_shift_earnings("22:00", "06:00", WEDNESDAY, make_job(night_shift_bonus=0.0))
        self.assertEqual(calc.night_hours, 8.0)
        self.assertEqual(calc.night_bonus, 0.0)

    def test_calculate_night_hours_direct(self):
        start, end = shift_interval(WEDNESDAY, "23:00", "07:00")
        self.assertEqual(calculate_night_hours(start, end), 7.0)


class TestShabbat(unittest.TestCase):
    """Whole-shift Shabbat classification by start instant."""

    def test_saturday_day_shift(self):
        """Saturday 10:00-18:00 -> 8 Shabbat hours, nothing else."""
        calc = calculate_shift_earnings("10:00", "18:00", SATURDAY, make_job())
        self.assertEqual(calc.shabbat_hours, 8.0)
        self.assertEqual(calc.base_hours, 0.0)
        self.assertEqual(calc.overtime_hours, 0.0)
        self.assertEqual(calc.night_hours, 0.0)
        self.assertEqual(calc.night_bonus, 0.0)
        self.assertEqual(calc.shabbat_earnings, 480.0)

    def test_saturday_night_shift_has_no_night_bonus(self):
        """Saturday 22:00-06:00 overlaps the night window but stays pure Shabbat."""
        calc = calculate_shift_earnings("22:00", "06:00", SATURDAY, make_job())
        self.assertEqual(calc.shabbat_hours, 8.0)
        self.assertEqual(calc.night_hours, 0.0)
        self.assertEqual(calc.night_bonus, 0.0)

    def test_friday_evening_start(self):
        """Friday 18:00 onward is Shabbat."""
        calc = calculate_shift_earnings("18:00", "23:00", FRIDAY, make_job())
        self.assertEqual(calc.shabbat_hours, 5.0)
        self.assertEqual(calc.base_hours, 0.0)

    def test_friday_afternoon_start_is_not_split(self):
        """Friday 16:00-02:00 starts before 18:00, so none of it is Shabbat."""
        calc = calculate_shift_earnings("16:00", "02:00", FRIDAY, make_job())
        self.assertEqual(calc.shabbat_hours, 0.0)
        self.assertEqual(calc.base_hours, 8.0)
        self.assertEqual(calc.overtime_hours, 2.0)
        self.assertEqual(calc.night_hours, 4.0)

    def test_friday_one_minute_before_shabbat(self):
        """Friday 17:59-23:00 starts before 18:00 and is paid as a weekday."""
        calc = calculate_shift_earnings("17:59", "23:00", FRIDAY, make_job())
        self.assertEqual(calc.shabbat_hours, 0.0)
        self.assertAlmostEqual(calc.base_hours, 5 + 1 / 60)
        self.assertEqual(calc.overtime_hours, 0.0)
        self.assertEqual(calc.night_hours, 1.0)
        self.assertEqual(calc.night_bonus, 10.0)

    def test_saturday_into_sunday(self):
        """Saturday 23:00-03:00 Sunday is all Shabbat."""
        calc = calculate_shift_earnings("23:00", "03:00", SATURDAY, make_job())
        self.assertEqual(calc.shabbat_hours, 4.0)

    def test_sunday_is_regular(self):
        calc = calculate_shift_earnings("10:00", "18:00", SUNDAY, make_job())
        self.assertEqual(calc.shabbat_hours, 0.0)
        self.assertEqual(calc.base_hours, 8.0)

    def test_long_shabbat_shift_has_no_overtime(self):
        calc = calculate_shift_earnings("08:00", "20:00", SATURDAY, make_job())
        self.assertEqual(calc.shabbat_hours, 12.0)
        self.assertEqual(calc.overtime_hours, 0.0)


class TestTransport(unittest.TestCase):
    """Daily transport allowance."""

    def test_auto_transport_statutory_floor(self):
        """5300 * 7.5% / 22 is below the daily floor, so 30 applies."""
        job = make_job(auto_transport=True, transport_cost=99.0)
        self.assertEqual(calculate_transport_cost(job), 30.0)

    def test_auto_transport_independent_of_rates_and_duration(self):
        short = calculate_shift_earnings("09:00", "10:00", WEDNESDAY, make_job(auto_transport=True))
        long = calculate_shift_earnings(
            "08:00", "20:00", WEDNESDAY, make_job(auto_transport=True, base_rate=100.0)
        )
        self.assertEqual(short.transport_cost, 30.0)
        self.assertEqual(long.transport_cost, 30.0)

    def test_flat_transport_used_verbatim(self):
        self.assertEqual(calculate_transport_cost(make_job(transport_cost=12.5)), 12.5)

    def test_transport_added_once(self):
        calc = calculate_shift_earnings("08:00", "12:00", WEDNESDAY, make_job(transport_cost=10.0))
        self.assertEqual(calc.total_earnings, 160.0 + 10.0)


class TestBreakdown(unittest.TestCase):
    """Breakdown line items."""

    def test_plain_shift_two_lines(self):
        """4 regular hours with flat transport -> regular + transport."""
        calc = calculate_shift_earnings("09:00", "13:00", WEDNESDAY, make_job())
        self.assertEqual(calc.breakdown, [
            "4.0 שעות רגילות: ₪160.00",
            "נסיעה: ₪25.00",
        ])

    def test_full_order(self):
        """Regular, overtime, night, transport in that order."""
        calc = calculate_shift_earnings("20:00", "08:00", WEDNESDAY, make_job())
        self.assertEqual(calc.breakdown, [
            "8.0 שעות רגילות: ₪320.00",
            "4.0 שעות נוספות: ₪200.00",
            "8.0 שעות לילה (+25%): ₪80.00",
            "נסיעה: ₪25.00",
        ])

    def test_shabbat_line(self):
        calc = calculate_shift_earnings("10:00", "18:00", SATURDAY, make_job())
        self.assertEqual(calc.breakdown, [
            "8.0 שעות שבת: ₪480.00",
            "נסיעה: ₪25.00",
        ])

    def test_fractional_bonus_percentage(self):
        calc = calculate_shift_earnings("22:00", "23:00", WEDNESDAY, make_job(night_shift_bonus=12.5))
        self.assertIn("1.0 שעות לילה (+12.5%): ₪5.00", calc.breakdown)

    def test_large_bonus_percentage_not_in_exponent_form(self):
        calc = calculate_shift_earnings(
            "22:00", "23:00", WEDNESDAY, make_job(night_shift_bonus=1000000.0, transport_cost=0.0)
        )
        self.assertIn("(+1000000%)", calc.breakdown[-1])

    def test_no_transport_line_when_zero(self):
        calc = calculate_shift_earnings("09:00", "13:00", WEDNESDAY, make_job(transport_cost=0.0))
        self.assertEqual(len(calc.breakdown), 1)

    def test_empty_breakdown(self):
        calc = calculate_shift_earnings("09:00", "09:00", WEDNESDAY, make_job(transport_cost=0.0))
        self.assertEqual(calc.breakdown, [])
        self.assertEqual(calc.total_earnings, 0.0)


class TestInvariants(unittest.TestCase):
    """Properties that hold for every shift."""

    SHIFTS = [
        ("08:00", "16:00"), ("08:00", "20:00"), ("22:00", "06:00"), ("20:00", "08:00"),
        ("23:15", "01:45"), ("04:00", "10:00"), ("13:00", "13:00"), ("17:00", "05:30"),
        ("00:00", "23:59"), ("18:30", "03:10"),
    ]
    DATES = [WEDNESDAY, FRIDAY, SATURDAY, SUNDAY]

    def _each(self):
        job = make_job(auto_transport=True)
        return [
            calculate_shift_earnings(start, end, day, job)
            for day in self.DATES
            for start, end in self.SHIFTS
        ]

    def test_hour_buckets_cover_duration(self):
        for calc in self._each():
            if calc.shabbat_hours > 0:
                self.assertEqual(calc.base_hours + calc.overtime_hours, 0.0)
                self.assertEqual(calc.shabbat_hours, calc.total_hours)
            else:
                self.assertAlmostEqual(calc.base_hours + calc.overtime_hours, calc.total_hours, places=9)

    def test_night_hours_bounded(self):
        for calc in self._each():
            self.assertLessEqual(calc.night_hours, calc.total_hours)
            self.assertLessEqual(calc.night_hours, NIGHT_WINDOW_HOURS)
            self.assertGreaterEqual(calc.night_hours, 0.0)

    def test_total_is_exact_sum(self):
        for calc in self._each():
            self.assertEqual(
                calc.total_earnings,
                calc.base_earnings + calc.overtime_earnings + calc.shabbat_earnings
                + calc.night_bonus + calc.transport_cost
            )

    def test_breakdown_counts_non_zero_components(self):
        for calc in self._each():
            non_zero = sum(1 for v in (
                calc.base_hours, calc.overtime_hours, calc.shabbat_hours,
                calc.night_hours, calc.transport_cost,
            ) if v > 0)
            self.assertEqual(len(calc.breakdown), non_zero)

    def test_idempotent(self):
        job = make_job()
        first = calculate_shift_earnings("21:00", "07:00", WEDNESDAY, job)
        second = calculate_shift_earnings("21:00", "07:00", WEDNESDAY, job)
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main(verbosity=2)
