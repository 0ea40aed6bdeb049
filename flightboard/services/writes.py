"""Append path for participants, competitions and score submissions."""

from __future__ import annotations

import logging
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Dict, Iterable, Optional

from ..engine.coordinator import ViewCoordinator
from ..engine.errors import WriteFailure, WriteResult
from ..engine.records import Category
from ..engine.store import (
    COMPETITIONS,
    PARTICIPANTS,
    SCORES,
    SERVER_TIMESTAMP,
    RecordStore,
    collection_path,
)

logger = logging.getLogger(__name__)

NOT_FOUND = "Participant or competition not found"


class RecordWriter:
    """Builds records with their write-time snapshot fields and appends them.

    Nothing is applied to the local mirror here; new records become visible
    only once the store pushes its next snapshot.
    """

    def __init__(
        self,
        store: RecordStore,
        coordinator: ViewCoordinator,
        categories: Iterable[Category],
        timeout: Optional[float] = None,
    ) -> None:
        self._store = store
        self._coordinator = coordinator
        self._categories = {category.id: category for category in categories}
        self._timeout = timeout

    def add_participant(self, name: str, created_by: Optional[str]) -> WriteResult:
        name = (name or "").strip()
        if not name:
            return WriteResult.failure("Name is required")

        return self._append(
            PARTICIPANTS,
            {
                "name": name,
                "created_by": created_by,
                "created_at": SERVER_TIMESTAMP,
            },
        )

    def add_competition(
        self,
        name: str,
        location_code: str,
        category_id: str,
        created_by: Optional[str],
    ) -> WriteResult:
        name = (name or "").strip()
        location_code = (location_code or "").strip()
        if not name or not location_code:
            return WriteResult.failure("Name and location code are required")

        category = self._categories.get(category_id)
        if category is None:
            return WriteResult.failure(f"Unknown category: {category_id}")

        return self._append(
            COMPETITIONS,
            {
                "name": name,
                "location_code": location_code,
                "category_id": category.id,
                "category_name": category.name,
                "created_by": created_by,
                "created_at": SERVER_TIMESTAMP,
            },
        )

    def add_score(
        self,
        participant_id: str,
        competition_id: str,
        score: Any,
        submitted_by: Optional[str],
    ) -> WriteResult:
        try:
            value = parse_score(score)
        except ValueError as exc:
            return WriteResult.failure(str(exc))

        participant = self._coordinator.find_participant(participant_id)
        competition = self._coordinator.find_competition(competition_id)
        if participant is None or competition is None:
            return WriteResult.failure(NOT_FOUND)

        return self._append(
            SCORES,
            {
                "participant_id": participant.id,
                "participant_name": participant.name,
                "score": value,
                "competition_id": competition.id,
                "competition_name": competition.name,
                "category_id": competition.category_id,
                "submitted_by": submitted_by,
                "timestamp": SERVER_TIMESTAMP,
            },
        )

    def _append(self, collection: str, record: Dict[str, Any]) -> WriteResult:
        path = collection_path(self._coordinator.app_id, collection)
        try:
            record_id = self._store.append(path, record).result(timeout=self._timeout)
        except FutureTimeoutError:
            logger.error("Timed out adding to %s", collection)
            return WriteResult.failure(f"Timed out writing to {collection}")
        except WriteFailure as exc:
            logger.error("Error adding to %s: %s", collection, exc)
            return WriteResult.failure(str(exc))

        logger.info("Added %s record %s", collection, record_id)
        return WriteResult.success(record_id)


def parse_score(raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValueError("Score must be a positive integer")
    if isinstance(raw, float) and not raw.is_integer():
        raise ValueError("Score must be a positive integer")
    try:
        value = int(str(raw).strip()) if isinstance(raw, str) else int(raw)
    except (TypeError, ValueError):
        raise ValueError("Score must be a positive integer") from None
    if value < 1:
        raise ValueError("Score must be a positive integer")
    return value


__all__ = ["NOT_FOUND", "RecordWriter", "parse_score"]
