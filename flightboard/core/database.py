"""Database configuration helpers for the SQL record store."""

from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from .config import DATA_DIR, DATABASE_URL


def build_engine(url: str = DATABASE_URL) -> Engine:
    """Create an engine for ``url``, preparing the data directory for SQLite files."""

    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        if url.startswith(f"sqlite:///{DATA_DIR}"):
            DATA_DIR.mkdir(parents=True, exist_ok=True)
    return create_engine(url, connect_args=connect_args)


def init_db(engine: Engine, reset: bool = False) -> None:
    from .. import models  # noqa: F401 - ensure models are registered with SQLModel

    if reset:
        SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)


__all__ = ["build_engine", "init_db"]
