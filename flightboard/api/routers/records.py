"""Participant, competition and score endpoints."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from ...core import DEFAULT_AUTHOR
from ...engine import ViewCoordinator, WriteResult
from ...services.views import category_to_dict, competition_to_dict, participant_to_dict
from ...services.writes import NOT_FOUND, RecordWriter, parse_score
from ..deps import get_coordinator, get_writer

router = APIRouter(tags=["records"])


def _author(body: Dict[str, Any]) -> str:
    return (body.get("created_by") or "").strip() or DEFAULT_AUTHOR


def _created(result: WriteResult, status: int = 400) -> Dict[str, Any]:
    if result.ok:
        return {"ok": True, "id": result.record_id}
    if result.error == NOT_FOUND:
        raise HTTPException(404, result.error)
    raise HTTPException(status, result.error)


@router.get("/categories")
def list_categories(coordinator: ViewCoordinator = Depends(get_coordinator)) -> List[Dict[str, Any]]:
    """List the fixed leaderboard categories."""

    return [category_to_dict(category) for category in coordinator.categories]


@router.get("/participants")
def list_participants(coordinator: ViewCoordinator = Depends(get_coordinator)):
    """List mirrored participants."""

    return [participant_to_dict(participant) for participant in coordinator.participants]


@router.get("/competitions")
def list_competitions(coordinator: ViewCoordinator = Depends(get_coordinator)):
    """List mirrored competitions."""

    return [competition_to_dict(competition) for competition in coordinator.competitions]


@router.post("/participants")
def create_participant(body: Dict[str, Any], writer: RecordWriter = Depends(get_writer)):
    """Add a participant."""

    name = (body.get("name") or "").strip()
    if not name:
        raise HTTPException(400, "Name is required")

    return _created(writer.add_participant(name, _author(body)), status=502)


@router.post("/competitions")
def create_competition(
    body: Dict[str, Any],
    writer: RecordWriter = Depends(get_writer),
    coordinator: ViewCoordinator = Depends(get_coordinator),
):
    """Add a competition to one of the fixed categories."""

    name = (body.get("name") or "").strip()
    location_code = (body.get("location_code") or "").strip()
    category_id = body.get("category_id") or ""
    if not name or not location_code:
        raise HTTPException(400, "Name and location code are required")
    if category_id not in {category.id for category in coordinator.categories}:
        raise HTTPException(400, "Unknown category")

    return _created(
        writer.add_competition(name, location_code, category_id, _author(body)),
        status=502,
    )


@router.post("/scores")
def create_score(body: Dict[str, Any], writer: RecordWriter = Depends(get_writer)):
    """Record a score for a participant in a competition."""

    participant_id = body.get("participant_id")
    competition_id = body.get("competition_id")
    if not participant_id or not competition_id:
        raise HTTPException(400, "Participant and competition are required")
    try:
        score = parse_score(body.get("score"))
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from None

    return _created(
        writer.add_score(str(participant_id), str(competition_id), score, _author(body)),
        status=502,
    )


__all__ = ["router"]
