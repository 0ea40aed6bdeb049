"""Leaderboard endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from ...engine import UnknownCategoryError, ViewCoordinator
from ...services.views import leaderboard_to_dict
from ..deps import get_coordinator

router = APIRouter(tags=["leaderboard"])


@router.get("/leaderboards")
def list_leaderboards(coordinator: ViewCoordinator = Depends(get_coordinator)) -> Dict[str, Any]:
    """Get the ranked view of every category."""

    return {
        "ready": coordinator.ready,
        "categories": [
            leaderboard_to_dict(coordinator, category.id) for category in coordinator.categories
        ],
    }


@router.get("/leaderboards/{category_id}")
def get_leaderboard(
    category_id: str, coordinator: ViewCoordinator = Depends(get_coordinator)
) -> Dict[str, Any]:
    """Get the ranked view of one category."""

    try:
        leaderboard = leaderboard_to_dict(coordinator, category_id)
    except UnknownCategoryError:
        raise HTTPException(404, "Category not found") from None
    return {"ready": coordinator.ready, **leaderboard}


__all__ = ["router"]
