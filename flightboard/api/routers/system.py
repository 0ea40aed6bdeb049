"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...engine import COLLECTIONS, ViewCoordinator
from ...services.views import category_to_dict
from ..deps import get_coordinator

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple liveness probe."""

    return {"ok": True}


@router.get("/healthz")
def healthz() -> JSONResponse:
    """Kubernetes-style liveness endpoint."""

    return JSONResponse({"ok": True})


@router.get("/status")
def status(coordinator: ViewCoordinator = Depends(get_coordinator)) -> Dict[str, Any]:
    """Report data freshness and stream failures."""

    return {
        "ready": coordinator.ready,
        "loading": coordinator.loading,
        "collections": {name: coordinator.has_snapshot(name) for name in COLLECTIONS},
        "failures": {
            name: failure.message for name, failure in coordinator.failures.items()
        },
    }


@router.get("/config")
def get_config(coordinator: ViewCoordinator = Depends(get_coordinator)) -> Dict[str, Any]:
    """Expose frontend configuration values."""

    return {
        "app_id": coordinator.app_id,
        "categories": [category_to_dict(category) for category in coordinator.categories],
    }


__all__ = ["router"]
