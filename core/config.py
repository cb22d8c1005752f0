"""
Configuration management for ShiftCalc application.
Centralizes all configuration settings and environment variables.
"""
from __future__ import annotations

import logging
import os
from typing import Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


class Config:
    """Central configuration class for the application."""

    # Application version
    VERSION: str = "1.0.0"

    # Database configuration
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
    DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "10"))

    # Application configuration
    DEBUG: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")

    # Server configuration
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE: Optional[str] = os.getenv("LOG_FILE") or None

    LOCAL_TZ = ZoneInfo("Asia/Jerusalem")

    def __init__(self):
        """Warn early about settings that will fail later."""
        if not self.DATABASE_URL:
            logger.warning("DATABASE_URL is not set; database endpoints will be unavailable")

    @classmethod
    def from_env(cls) -> Config:
        """Create Config instance from environment variables."""
        return cls()


# Global config instance
config = Config.from_env()
