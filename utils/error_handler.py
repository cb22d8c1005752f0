"""
Error handling module for ShiftCalc application.
Provides centralized error handling, logging, and user-friendly error messages.
"""

from __future__ import annotations
import logging
import re
from datetime import datetime
from functools import wraps
from typing import Optional

import psycopg2
from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ShiftCalcError(Exception):
    """Base exception for all ShiftCalc errors"""
    status_code = 400

    def __init__(self, message: str, details: Optional[dict] = None, user_message: Optional[str] = None):
        self.message = message
        self.details = details or {}
        self.user_message = user_message or message
        super().__init__(self.message)


class DatabaseError(ShiftCalcError):
    """Database-related errors"""
    status_code = 503


class ValidationError(ShiftCalcError):
    """Input validation errors"""
    pass


class NotFoundError(ShiftCalcError):
    """Requested record does not exist"""
    status_code = 404


def log_error(error: Exception, context: Optional[dict] = None) -> str:
    """
    Log an error with full context and return error ID.

    Args:
        error: The exception that occurred
        context: Additional context (operation, path, parameters)

    Returns:
        Error ID for tracking
    """
    error_id = f"{datetime.now().timestamp():.0f}"

    error_details = {
        'error_id': error_id,
        'error_type': type(error).__name__,
        'error_message': str(error),
        'timestamp': datetime.now().isoformat(),
        'context': context or {}
    }

    if isinstance(error, ShiftCalcError):
        logger.error(f"Application error {error_id}: {error_details}")
    else:
        logger.error(f"Unexpected error {error_id}: {error_details}", exc_info=True)

    return error_id


def safe_database_operation(operation_name: str):
    """
    Decorator for safe database operations with automatic rollback.

    Usage:
        @safe_database_operation("fetch_job")
        def get_job(conn, job_id):
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            conn = None
            if args and hasattr(args[0], 'execute'):
                conn = args[0]
            elif 'conn' in kwargs:
                conn = kwargs['conn']

            try:
                return func(*args, **kwargs)
            except psycopg2.Error as e:
                if conn is not None:
                    try:
                        conn.rollback()
                        logger.info(f"Rolled back transaction for {operation_name}")
                    except psycopg2.Error as rollback_error:
                        logger.error(f"Rollback failed for {operation_name}: {rollback_error}")

                raise DatabaseError(
                    f"Database operation failed: {operation_name}",
                    details={'original_error': sanitize_error_message(str(e))},
                    user_message="אירעה שגיאה בגישה לבסיס הנתונים. נסה שנית."
                ) from e

        return wrapper
    return decorator


async def handle_application_error(request: Request, exc: ShiftCalcError) -> JSONResponse:
    """
    Handle application-specific errors with user-friendly messages.
    """
    error_id = log_error(exc, context={'path': request.url.path, 'method': request.method})
    return JSONResponse(
        status_code=exc.status_code,
        content={
            'error': exc.user_message,
            'error_id': error_id,
            'details': exc.details
        }
    )


async def handle_database_connection_error(request: Request, exc: psycopg2.OperationalError) -> JSONResponse:
    """Handle database connection errors with helpful messages."""
    error_msg = str(exc)

    if "could not translate host name" in error_msg or "Name or service not known" in error_msg:
        user_message = "שגיאת חיבור לבסיס הנתונים: לא ניתן לפתור את שם השרת."
    elif "connection refused" in error_msg.lower():
        user_message = "שגיאת חיבור לבסיס הנתונים: השרת דחה את החיבור."
    else:
        user_message = "שגיאת חיבור לבסיס הנתונים."

    error_id = log_error(exc, context={'path': request.url.path, 'method': request.method})
    return JSONResponse(
        status_code=503,
        content={
            'error': user_message,
            'error_id': error_id,
            'error_type': 'database_connection_error'
        }
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors with generic message (no sensitive info).
    """
    error_id = log_error(exc, context={'path': request.url.path, 'method': request.method})
    return JSONResponse(
        status_code=500,
        content={
            'error': 'אירעה שגיאה בלתי צפויה',
            'error_id': error_id
        }
    )


def sanitize_error_message(message: str) -> str:
    """
    Remove sensitive information from error messages before showing to users.
    """
    # Remove file paths
    message = re.sub(r'[A-Z]:[\\\/][\w\\\/\-\.]+', '[PATH]', message)

    # Remove SQL queries
    message = re.sub(r'(SELECT|INSERT|UPDATE|DELETE|FROM|WHERE).*', '[QUERY]', message, flags=re.IGNORECASE)

    # Remove stack traces
    message = re.sub(r'File ".*", line \d+.*', '[TRACE]', message)

    return message
