"""
Input validation for ShiftCalc request payloads.
Every function raises ValidationError with a Hebrew user message on bad input.
"""
from __future__ import annotations

import math
import re
from datetime import date
from typing import Any, Dict, Optional

from core.models import Job
from utils.error_handler import ValidationError

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

JOB_RATE_FIELDS = ("base_rate", "overtime_rate", "shabbat_rate", "transport_cost",
                   "overtime_after", "night_shift_bonus")


def validate_time_string(value: Any, field_name: str) -> str:
    """Require a non-empty 'HH:MM' string (00:00-23:59)."""
    if not value:
        raise ValidationError(
            f"{field_name} is required",
            details={'field': field_name},
            user_message="אנא מלא שעת התחלה ושעת סיום"
        )
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise ValidationError(
            f"Invalid time for {field_name}",
            details={'field': field_name, 'got': str(value)},
            user_message=f"שעה לא תקינה: {value}"
        )
    return value


def validate_date_string(value: Any, field_name: str = "date") -> date:
    """Require an ISO 'YYYY-MM-DD' date."""
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(
            f"Invalid date for {field_name}",
            details={'field': field_name, 'got': str(value)},
            user_message=f"תאריך לא תקין: {value}"
        )


def validate_month(year: int, month: int) -> None:
    if not 1 <= month <= 12:
        raise ValidationError(
            "month is out of range",
            details={'min': 1, 'max': 12, 'got': month},
            user_message="חודש חייב להיות בין 1 ל-12"
        )
    if not 2000 <= year <= 2100:
        raise ValidationError(
            "year is out of range",
            details={'min': 2000, 'max': 2100, 'got': year},
            user_message="שנה לא תקינה"
        )


def validate_shift_payload(body: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a shift request body.

    Returns:
        dict with date (date), start_time, end_time and optional job_id
    """
    shift_date = validate_date_string(body.get("date"))
    start_time = validate_time_string(body.get("start_time"), "start_time")
    end_time = validate_time_string(body.get("end_time"), "end_time")

    job_id: Optional[int] = body.get("job_id")
    if job_id is not None and (isinstance(job_id, bool) or not isinstance(job_id, int)):
        raise ValidationError(
            "Invalid type for job_id",
            details={'expected': 'int', 'got': type(job_id).__name__},
            user_message="מזהה עבודה לא תקין"
        )

    return {
        "date": shift_date,
        "start_time": start_time,
        "end_time": end_time,
        "job_id": job_id,
    }


def validate_job_payload(body: Dict[str, Any]) -> Job:
    """
    Validate a job configuration and build a Job from it.

    Rates must be finite numbers; the base rate must be positive and no rate,
    threshold or bonus may be negative. Missing optional fields take the
    defaults of a new job.
    """
    if not isinstance(body, dict):
        raise ValidationError("Job payload must be an object", user_message="נתוני עבודה לא תקינים")

    name = body.get("name")
    if name is not None and not isinstance(name, str):
        raise ValidationError(
            "Invalid type for name",
            details={'expected': 'str', 'got': type(name).__name__},
            user_message="שם עבודה לא תקין"
        )
    name = (name or "").strip()
    if not name:
        raise ValidationError(
            "name is required",
            details={'field': 'name'},
            user_message="אנא הכנס שם עבודה"
        )

    if "base_rate" not in body:
        raise ValidationError(
            "base_rate is required",
            details={'field': 'base_rate'},
            user_message="אנא הכנס שכר בסיס לשעה"
        )

    for field_name in JOB_RATE_FIELDS:
        if field_name not in body:
            continue
        value = body[field_name]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(
                f"Invalid type for {field_name}",
                details={'expected': 'number', 'got': type(value).__name__},
                user_message=f"ערך לא תקין עבור {field_name}"
            )
        if not math.isfinite(value):
            raise ValidationError(
                f"{field_name} must be a finite number",
                details={'got': str(value)},
                user_message=f"ערך לא תקין עבור {field_name}"
            )
        if value < 0:
            raise ValidationError(
                f"{field_name} is below minimum",
                details={'min': 0, 'got': value},
                user_message=f"{field_name} לא יכול להיות שלילי"
            )

    if body["base_rate"] <= 0:
        raise ValidationError(
            "base_rate must be positive",
            details={'got': body["base_rate"]},
            user_message="שכר הבסיס חייב להיות גדול מאפס"
        )

    location = body.get("location")
    if location is not None and not isinstance(location, str):
        raise ValidationError(
            "Invalid type for location",
            details={'expected': 'str', 'got': type(location).__name__},
            user_message="מיקום לא תקין"
        )

    auto_transport = body.get("auto_transport", True)
    if not isinstance(auto_transport, bool):
        raise ValidationError(
            "Invalid type for auto_transport",
            details={'expected': 'bool', 'got': type(auto_transport).__name__},
            user_message="ערך לא תקין עבור auto_transport"
        )

    return Job.from_row({**body, "name": name, "id": None})
