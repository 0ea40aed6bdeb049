"""Serialise engine records to API-friendly dicts."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from ..engine.coordinator import ViewCoordinator
from ..engine.deriver import rank_entries
from ..engine.records import Category, Competition, LeaderboardEntry, Participant


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def category_to_dict(category: Category) -> Dict[str, Any]:
    return {"id": category.id, "name": category.name, "description": category.description}


def participant_to_dict(participant: Participant) -> Dict[str, Any]:
    return {
        "id": participant.id,
        "name": participant.name,
        "created_by": participant.created_by,
        "created_at": _iso(participant.created_at),
    }


def competition_to_dict(competition: Competition) -> Dict[str, Any]:
    return {
        "id": competition.id,
        "name": competition.name,
        "location_code": competition.location_code,
        "category_id": competition.category_id,
        "category_name": competition.category_name,
        "created_by": competition.created_by,
        "created_at": _iso(competition.created_at),
    }


def entry_to_dict(rank: int, entry: LeaderboardEntry) -> Dict[str, Any]:
    return {
        "rank": rank,
        "id": entry.id,
        "name": entry.name,
        "high_score": entry.high_score,
        "last_updated": _iso(entry.last_updated),
    }


def leaderboard_to_dict(coordinator: ViewCoordinator, category_id: str) -> Dict[str, Any]:
    """Serialise one category with its competitions and ranked entries."""

    category = coordinator.category(category_id)
    entries = coordinator.current_view(category_id)
    return {
        **category_to_dict(category),
        "competitions": [
            competition_to_dict(competition)
            for competition in coordinator.competitions_for(category_id)
        ],
        "entries": [entry_to_dict(rank, entry) for rank, entry in rank_entries(entries)],
    }


__all__ = [
    "category_to_dict",
    "competition_to_dict",
    "entry_to_dict",
    "leaderboard_to_dict",
    "participant_to_dict",
]
