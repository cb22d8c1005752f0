"""
Database connection and utilities for ShiftCalc application.
Provides PostgreSQL connection wrapper and database utilities.
Uses connection pooling for better performance.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import psycopg2
import psycopg2.extras
from psycopg2 import pool

from core.config import config

logger = logging.getLogger(__name__)

# Connection pool - initialized lazily
_pool: Optional[pool.ThreadedConnectionPool] = None


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS jobs (
    id SERIAL PRIMARY KEY,
    name TEXT NOT NULL,
    location TEXT NOT NULL DEFAULT '',
    base_rate NUMERIC(10, 2) NOT NULL,
    overtime_rate NUMERIC(10, 2) NOT NULL,
    shabbat_rate NUMERIC(10, 2) NOT NULL,
    transport_cost NUMERIC(10, 2) NOT NULL DEFAULT 0,
    auto_transport BOOLEAN NOT NULL DEFAULT TRUE,
    overtime_after NUMERIC(5, 2) NOT NULL DEFAULT 8,
    night_shift_bonus NUMERIC(6, 2) NOT NULL DEFAULT 0,
    created_at TIMESTAMPTZ NOT NULL DEFAULT now()
);

CREATE TABLE IF NOT EXISTS shifts (
    id SERIAL PRIMARY KEY,
    job_id INTEGER REFERENCES jobs(id) ON DELETE SET NULL,
    date DATE NOT NULL,
    start_time TEXT NOT NULL,
    end_time TEXT NOT NULL,
    duration DOUBLE PRECISION NOT NULL,
    base_hours DOUBLE PRECISION NOT NULL,
    overtime_hours DOUBLE PRECISION NOT NULL,
    shabbat_hours DOUBLE PRECISION NOT NULL,
    night_hours DOUBLE PRECISION NOT NULL,
    base_earnings DOUBLE PRECISION NOT NULL,
    overtime_earnings DOUBLE PRECISION NOT NULL,
    shabbat_earnings DOUBLE PRECISION NOT NULL,
    night_bonus DOUBLE PRECISION NOT NULL,
    transport_cost DOUBLE PRECISION NOT NULL,
    earnings DOUBLE PRECISION NOT NULL,
    breakdown TEXT[] NOT NULL DEFAULT '{}',
    created_at TIMESTAMPTZ NOT NULL DEFAULT now()
);

CREATE TABLE IF NOT EXISTS app_settings (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""


def _get_pool() -> pool.ThreadedConnectionPool:
    """Get or create the connection pool."""
    global _pool
    if _pool is None:
        if not config.DATABASE_URL:
            raise RuntimeError("DATABASE_URL environment variable is required")
        _pool = pool.ThreadedConnectionPool(
            minconn=config.DB_POOL_MIN,
            maxconn=config.DB_POOL_MAX,
            dsn=config.DATABASE_URL
        )
        logger.info("Database connection pool created")
    return _pool


def get_pooled_connection():
    """Get a connection from the pool."""
    return _get_pool().getconn()


def return_connection(conn, close: bool = False):
    """Return a connection to the pool. close=True discards a broken connection."""
    if _pool is not None:
        _pool.putconn(conn, close=close)


class PostgresConnection:
    """Wrapper for PostgreSQL connection returning dict rows.
    Commits on a clean exit, rolls back on error and returns the connection to the pool."""

    def __init__(self, conn, use_pool: bool = True):
        self.conn = conn
        self._use_pool = use_pool

    def execute(self, query: str, params: tuple = ()) -> Any:
        """Execute a query and return a RealDictCursor."""
        cursor = self.conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor)
        cursor.execute(query, params)
        return cursor

    def commit(self):
        if not self.conn.closed:
            self.conn.commit()

    def rollback(self):
        if not self.conn.closed:
            self.conn.rollback()

    def close(self):
        if self.conn.closed:
            if self._use_pool:
                return_connection(self.conn, close=True)
            return
        if self._use_pool:
            return_connection(self.conn)
        else:
            self.conn.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.conn.closed:
            # החיבור נסגר בצד השרת - משחררים את המקום בבריכה
            self.close()
            return
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        self.close()


def get_conn() -> PostgresConnection:
    """Borrow a pooled PostgreSQL connection wrapped for use as a context manager."""
    return PostgresConnection(get_pooled_connection(), use_pool=True)


def init_schema() -> None:
    """Create the application tables if they do not exist."""
    with get_conn() as conn:
        conn.execute(SCHEMA_SQL)
    logger.info("Database schema ensured")


def close_all_pools():
    """Close the database connection pool. Used for graceful shutdown."""
    global _pool

    if _pool:
        try:
            _pool.closeall()
            logger.info("Database pool closed")
        except psycopg2.Error as e:
            logger.error(f"Error closing database pool: {e}")
        finally:
            _pool = None
