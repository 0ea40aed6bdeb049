"""Core configuration and infrastructure helpers."""

from .categories import CATEGORIES
from .config import (
    ALLOWED_CORS_ORIGINS,
    APP_ID,
    DATABASE_URL,
    DATA_DIR,
    DB_RESET,
    DEFAULT_AUTHOR,
    LOG_LEVEL,
    WRITE_TIMEOUT_SEC,
)
from .database import build_engine, init_db
from .log import configure_logging
from .time import utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "APP_ID",
    "CATEGORIES",
    "DATABASE_URL",
    "DATA_DIR",
    "DB_RESET",
    "DEFAULT_AUTHOR",
    "LOG_LEVEL",
    "WRITE_TIMEOUT_SEC",
    "build_engine",
    "configure_logging",
    "init_db",
    "utcnow",
]
