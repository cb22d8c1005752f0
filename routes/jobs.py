"""
Job routes for ShiftCalc application.
Manage job rate configurations and the selected job.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import Request

from core.database import get_conn
from core.jobs import (
    create_job,
    delete_job,
    get_selected_job,
    list_jobs,
    require_job,
    set_selected_job_id,
    update_job,
)
from routes.shifts import read_json_body
from utils.error_handler import ValidationError
from utils.validators import validate_job_payload

logger = logging.getLogger(__name__)


def get_jobs() -> Dict[str, Any]:
    with get_conn() as conn:
        jobs = list_jobs(conn)
        selected = get_selected_job(conn)
    return {
        "jobs": [j.to_dict() for j in jobs],
        "selected_job_id": selected.id if selected else None,
    }


async def add_job(request: Request) -> Dict[str, Any]:
    job = validate_job_payload(await read_json_body(request))
    with get_conn() as conn:
        created = create_job(conn, job)
    return created.to_dict()


async def edit_job(job_id: int, request: Request) -> Dict[str, Any]:
    """Partial update: fields missing from the body keep their stored values."""
    body = await read_json_body(request)
    with get_conn() as conn:
        existing = require_job(conn, job_id)
        job = validate_job_payload({**existing.to_dict(), **body})
        updated = update_job(conn, job_id, job)
    return updated.to_dict()


def remove_job(job_id: int) -> Dict[str, Any]:
    with get_conn() as conn:
        delete_job(conn, job_id)
    return {"success": True, "id": job_id}


def selected_job() -> Dict[str, Any]:
    with get_conn() as conn:
        job = get_selected_job(conn)
    return {"job": job.to_dict() if job else None}


async def select_job(request: Request) -> Dict[str, Any]:
    body = await read_json_body(request)
    job_id = body.get("job_id")
    if isinstance(job_id, bool) or not isinstance(job_id, int):
        raise ValidationError(
            "Invalid type for job_id",
            details={'expected': 'int', 'got': type(job_id).__name__},
            user_message="מזהה עבודה לא תקין"
        )
    with get_conn() as conn:
        job = require_job(conn, job_id)
        set_selected_job_id(conn, job_id)
    return {"job": job.to_dict()}
