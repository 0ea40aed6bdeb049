"""FastAPI dependencies for the engine objects held on the app state."""

from __future__ import annotations

from fastapi import Request

from ..engine.coordinator import ViewCoordinator
from ..services.writes import RecordWriter


def get_coordinator(request: Request) -> ViewCoordinator:
    return request.app.state.coordinator


def get_writer(request: Request) -> RecordWriter:
    return request.app.state.writer


__all__ = ["get_coordinator", "get_writer"]
