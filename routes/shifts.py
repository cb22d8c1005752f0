"""
Shift routes for ShiftCalc application.
Calculate, record, list and summarize shifts.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from fastapi import Request

from core.database import get_conn
from core.earnings import calculate_shift_earnings
from core.jobs import get_selected_job, require_job
from core.models import Job
from core.shifts import delete_shift, get_month_summary, list_shifts_for_month, record_shift
from core.time_utils import today_local
from utils.error_handler import NotFoundError, ValidationError
from utils.validators import validate_job_payload, validate_month, validate_shift_payload

logger = logging.getLogger(__name__)


async def read_json_body(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except json.JSONDecodeError:
        raise ValidationError("Request body is not valid JSON", user_message="גוף הבקשה אינו JSON תקין")
    if not isinstance(body, dict):
        raise ValidationError("Request body must be an object", user_message="גוף הבקשה אינו תקין")
    return body


def _resolve_job(conn, job_id: Optional[int]) -> Job:
    """Job by id, or the selected job when no id is given."""
    if job_id is not None:
        return require_job(conn, job_id)
    job = get_selected_job(conn)
    if job is None:
        raise NotFoundError("No job selected", user_message="לא נבחרה עבודה. הגדר עבודה לפני רישום משמרת")
    return job


def _resolve_month(year: Optional[int], month: Optional[int]) -> tuple[int, int]:
    today = today_local()
    year = year if year is not None else today.year
    month = month if month is not None else today.month
    validate_month(year, month)
    return year, month


async def calculate_shift(request: Request) -> Dict[str, Any]:
    """
    Calculate a shift without storing it.

    An inline "job" object in the body is used as is; otherwise job_id or the
    selected job is loaded from the database.
    """
    body = await read_json_body(request)
    shift = validate_shift_payload(body)

    if body.get("job") is not None:
        job = validate_job_payload(body["job"])
    else:
        with get_conn() as conn:
            job = _resolve_job(conn, shift["job_id"])

    calc = calculate_shift_earnings(shift["start_time"], shift["end_time"], shift["date"], job)
    return {"job": job.to_dict(), "calculation": calc.to_dict()}


async def create_shift(request: Request) -> Dict[str, Any]:
    """Calculate a shift with a stored job and save it."""
    body = await read_json_body(request)
    shift = validate_shift_payload(body)
    if body.get("job") is not None:
        raise ValidationError(
            "Stored shifts must reference a saved job",
            details={'field': 'job'},
            user_message="ניתן לשמור משמרת רק עבור עבודה שמורה"
        )

    with get_conn() as conn:
        job = _resolve_job(conn, shift["job_id"])
        row = record_shift(conn, job, shift["date"], shift["start_time"], shift["end_time"])
    return row


def list_shifts(year: Optional[int] = None, month: Optional[int] = None) -> Dict[str, Any]:
    year, month = _resolve_month(year, month)
    with get_conn() as conn:
        shifts = list_shifts_for_month(conn, year, month)
    return {"year": year, "month": month, "shifts": shifts}


def remove_shift(shift_id: int) -> Dict[str, Any]:
    with get_conn() as conn:
        delete_shift(conn, shift_id)
    return {"success": True, "id": shift_id}


def month_summary(year: Optional[int] = None, month: Optional[int] = None) -> Dict[str, Any]:
    year, month = _resolve_month(year, month)
    with get_conn() as conn:
        return get_month_summary(conn, year, month)
