"""Record types mirrored from the store and the documents they are parsed from."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Category:
    """Fixed grouping of competitions that share one leaderboard."""

    id: str
    name: str
    description: str = ""


@dataclass(frozen=True)
class Participant:
    id: str
    name: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Competition:
    """A challenge; ``category_name`` is copied from the category at creation."""

    id: str
    name: str
    category_id: str
    category_name: str = ""
    location_code: str = ""
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ScoreSubmission:
    """One uploaded score.

    ``participant_name``, ``competition_name`` and ``category_id`` are snapshots
    of the referenced records taken when the score was written.
    """

    id: str
    participant_id: str
    competition_id: str
    score: int
    category_id: Optional[str] = None
    participant_name: Optional[str] = None
    competition_name: Optional[str] = None
    submitted_by: Optional[str] = None
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class LeaderboardEntry:
    """A participant's best qualifying score within one category."""

    id: str
    name: str
    high_score: int
    last_updated: Optional[datetime] = None


@dataclass(frozen=True)
class Snapshot:
    """Complete state of one collection as delivered by the store."""

    collection: str
    records: Tuple[Dict[str, Any], ...]
    version: Optional[int] = None


def parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def participant_from_doc(doc: Mapping[str, Any]) -> Participant:
    return Participant(
        id=str(doc["id"]),
        name=str(doc.get("name") or ""),
        created_by=_optional_str(doc.get("created_by")),
        created_at=parse_timestamp(doc.get("created_at")),
    )


def competition_from_doc(doc: Mapping[str, Any]) -> Competition:
    return Competition(
        id=str(doc["id"]),
        name=str(doc.get("name") or ""),
        category_id=str(doc.get("category_id") or ""),
        category_name=str(doc.get("category_name") or ""),
        location_code=str(doc.get("location_code") or ""),
        created_by=_optional_str(doc.get("created_by")),
        created_at=parse_timestamp(doc.get("created_at")),
    )


def coerce_score(value: Any) -> int:
    """Numeric coercion of a stored score; ``"650"``, ``"650.0"`` and ``650.0`` all give 650."""

    if isinstance(value, bool):
        raise ValueError(f"invalid score: {value!r}")
    number = float(value.strip()) if isinstance(value, str) else float(value)
    if not number.is_integer():
        raise ValueError(f"invalid score: {value!r}")
    return int(number)


def score_from_doc(doc: Mapping[str, Any]) -> ScoreSubmission:
    return ScoreSubmission(
        id=str(doc["id"]),
        participant_id=str(doc["participant_id"]),
        competition_id=str(doc["competition_id"]),
        score=coerce_score(doc["score"]),
        category_id=_optional_str(doc.get("category_id")),
        participant_name=_optional_str(doc.get("participant_name")),
        competition_name=_optional_str(doc.get("competition_name")),
        submitted_by=_optional_str(doc.get("submitted_by")),
        timestamp=parse_timestamp(doc.get("timestamp")),
    )


PARSERS: Dict[str, Callable[[Mapping[str, Any]], Any]] = {
    "participants": participant_from_doc,
    "competitions": competition_from_doc,
    "scores": score_from_doc,
}


__all__ = [
    "Category",
    "Competition",
    "LeaderboardEntry",
    "PARSERS",
    "Participant",
    "ScoreSubmission",
    "Snapshot",
    "coerce_score",
    "competition_from_doc",
    "parse_timestamp",
    "participant_from_doc",
    "score_from_doc",
]
