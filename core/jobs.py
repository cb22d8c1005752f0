"""
Job store for ShiftCalc application.
CRUD for job rate configurations and the currently selected job.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from core.constants import SELECTED_JOB_SETTING
from core.models import Job
from utils.error_handler import NotFoundError, safe_database_operation

logger = logging.getLogger(__name__)

JOB_COLUMNS = (
    "id, name, location, base_rate, overtime_rate, shabbat_rate, transport_cost, "
    "auto_transport, overtime_after, night_shift_bonus"
)


@safe_database_operation("list_jobs")
def list_jobs(conn) -> List[Job]:
    rows = conn.execute(f"SELECT {JOB_COLUMNS} FROM jobs ORDER BY id").fetchall()
    return [Job.from_row(r) for r in rows]


@safe_database_operation("get_job")
def get_job(conn, job_id: int) -> Optional[Job]:
    row = conn.execute(f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = %s", (job_id,)).fetchone()
    return Job.from_row(row) if row else None


def require_job(conn, job_id: int) -> Job:
    """Like get_job, but a missing job is an error."""
    job = get_job(conn, job_id)
    if job is None:
        raise NotFoundError(
            f"Job {job_id} not found",
            details={'job_id': job_id},
            user_message="העבודה לא נמצאה"
        )
    return job


@safe_database_operation("create_job")
def create_job(conn, job: Job) -> Job:
    """Insert a job and return it with its new id."""
    row = conn.execute(
        f"""
        INSERT INTO jobs (name, location, base_rate, overtime_rate, shabbat_rate,
                          transport_cost, auto_transport, overtime_after, night_shift_bonus)
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
        RETURNING {JOB_COLUMNS}
        """,
        (job.name, job.location, job.base_rate, job.overtime_rate, job.shabbat_rate,
         job.transport_cost, job.auto_transport, job.overtime_after, job.night_shift_bonus),
    ).fetchone()
    logger.info(f"Created job {row['id']} ({job.name})")

    # העבודה הראשונה נבחרת אוטומטית
    if get_selected_job_id(conn) is None:
        set_selected_job_id(conn, row["id"])

    return Job.from_row(row)


@safe_database_operation("update_job")
def update_job(conn, job_id: int, job: Job) -> Job:
    """Overwrite a job's settings and return the stored job."""
    row = conn.execute(
        f"""
        UPDATE jobs
        SET name = %s, location = %s, base_rate = %s, overtime_rate = %s, shabbat_rate = %s,
            transport_cost = %s, auto_transport = %s, overtime_after = %s, night_shift_bonus = %s
        WHERE id = %s
        RETURNING {JOB_COLUMNS}
        """,
        (job.name, job.location, job.base_rate, job.overtime_rate, job.shabbat_rate,
         job.transport_cost, job.auto_transport, job.overtime_after, job.night_shift_bonus,
         job_id),
    ).fetchone()
    if row is None:
        raise NotFoundError(
            f"Job {job_id} not found",
            details={'job_id': job_id},
            user_message="העבודה לא נמצאה"
        )
    logger.info(f"Updated job {job_id} ({job.name})")
    return Job.from_row(row)


@safe_database_operation("delete_job")
def delete_job(conn, job_id: int) -> None:
    cursor = conn.execute("DELETE FROM jobs WHERE id = %s", (job_id,))
    if cursor.rowcount == 0:
        raise NotFoundError(
            f"Job {job_id} not found",
            details={'job_id': job_id},
            user_message="העבודה לא נמצאה"
        )
    # העבודה שנמחקה הייתה נבחרת - עוברים לעבודה הראשונה שנשארה
    if get_selected_job_id(conn) == job_id:
        first = conn.execute("SELECT id FROM jobs ORDER BY id LIMIT 1").fetchone()
        if first:
            set_selected_job_id(conn, first["id"])
        else:
            conn.execute("DELETE FROM app_settings WHERE key = %s", (SELECTED_JOB_SETTING,))
    logger.info(f"Deleted job {job_id}")


@safe_database_operation("get_selected_job_id")
def get_selected_job_id(conn) -> Optional[int]:
    row = conn.execute(
        "SELECT value FROM app_settings WHERE key = %s", (SELECTED_JOB_SETTING,)
    ).fetchone()
    if not row or not row["value"]:
        return None
    return int(row["value"])


@safe_database_operation("set_selected_job_id")
def set_selected_job_id(conn, job_id: int) -> None:
    conn.execute(
        """
        INSERT INTO app_settings (key, value) VALUES (%s, %s)
        ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value
        """,
        (SELECTED_JOB_SETTING, str(job_id)),
    )
    logger.info(f"Selected job set to {job_id}")


def get_selected_job(conn) -> Optional[Job]:
    """The active job, or None when nothing is selected or it no longer exists."""
    job_id = get_selected_job_id(conn)
    if job_id is None:
        return None
    return get_job(conn, job_id)
