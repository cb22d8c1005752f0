"""
Main application file for ShiftCalc.
JSON API for shift earnings calculation, shift records and job settings.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import psycopg2

from core.config import config
from core.database import close_all_pools, get_conn, init_schema
from routes.jobs import add_job, edit_job, get_jobs, remove_job, select_job, selected_job
from routes.shifts import (
    calculate_shift,
    create_shift,
    list_shifts,
    month_summary,
    remove_shift,
)
from utils.error_handler import (
    ShiftCalcError,
    handle_application_error,
    handle_database_connection_error,
    handle_unexpected_error,
)

# Configure logging
_handlers: list[logging.Handler] = [logging.StreamHandler()]
if config.LOG_FILE:
    _handlers.append(logging.FileHandler(config.LOG_FILE, encoding='utf-8'))
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=_handlers
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"ShiftCalc {config.VERSION} starting")
    if config.DATABASE_URL:
        init_schema()
    yield
    close_all_pools()


# FastAPI app setup
app = FastAPI(title="מחשבון משמרות", version=config.VERSION, lifespan=lifespan)

app.add_exception_handler(ShiftCalcError, handle_application_error)
app.add_exception_handler(psycopg2.OperationalError, handle_database_connection_error)
app.add_exception_handler(Exception, handle_unexpected_error)


@app.get("/health")
def health_check():
    """Health check endpoint that tests database connectivity."""
    try:
        with get_conn() as conn:
            conn.execute("SELECT 1").fetchone()
        return {"status": "ok", "database": "connected"}
    except (psycopg2.Error, RuntimeError) as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": "disconnected", "error": str(e)}
        )


# Shift routes
@app.post("/api/shifts/calculate")
async def calculate_shift_route(request: Request):
    """Calculate shift earnings without saving."""
    return await calculate_shift(request)


@app.get("/api/shifts/summary")
def month_summary_route(year: int | None = None, month: int | None = None):
    """Monthly totals per pay category."""
    return month_summary(year, month)


@app.get("/api/shifts")
def list_shifts_route(year: int | None = None, month: int | None = None):
    """Shifts of a month, newest first."""
    return list_shifts(year, month)


@app.post("/api/shifts")
async def create_shift_route(request: Request):
    """Calculate and save a shift."""
    return await create_shift(request)


@app.delete("/api/shifts/{shift_id}")
def delete_shift_route(shift_id: int):
    """Delete a shift."""
    return remove_shift(shift_id)


# Job routes
@app.get("/api/jobs")
def list_jobs_route():
    """All jobs and the selected job id."""
    return get_jobs()


@app.post("/api/jobs")
async def create_job_route(request: Request):
    """Add a job."""
    return await add_job(request)


@app.get("/api/jobs/selected")
def selected_job_route():
    """The job used when a shift does not name one."""
    return selected_job()


@app.post("/api/jobs/selected")
async def select_job_route(request: Request):
    """Change the selected job."""
    return await select_job(request)


@app.put("/api/jobs/{job_id}")
async def update_job_route(job_id: int, request: Request):
    """Change a job's settings."""
    return await edit_job(job_id, request)


@app.delete("/api/jobs/{job_id}")
def delete_job_route(job_id: int):
    """Delete a job."""
    return remove_job(job_id)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app:app",
        host=config.HOST,
        port=config.PORT,
        reload=config.DEBUG
    )
