"""Logging setup."""

from __future__ import annotations

import logging

from .config import LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging once for the application process."""

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


__all__ = ["configure_logging"]
