"""Shared fixtures: an in-memory fake record store and record builders."""

from __future__ import annotations

from concurrent.futures import Future
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple

import pytest

from flightboard.core.categories import CATEGORIES
from flightboard.engine import Snapshot, ViewCoordinator, WriteFailure, collection_path
from flightboard.engine.records import competition_from_doc, participant_from_doc, score_from_doc

APP_ID = "test-app"
EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


def at(seconds: Optional[int]) -> Optional[datetime]:
    return None if seconds is None else EPOCH + timedelta(seconds=seconds)


def participant_doc(pid: str, name: str) -> Dict[str, Any]:
    return {"id": pid, "name": name, "created_by": "admin", "created_at": at(0)}


def competition_doc(cid: str, category_id: str, name: str = "Pattern work") -> Dict[str, Any]:
    return {
        "id": cid,
        "name": name,
        "location_code": "KSEA",
        "category_id": category_id,
        "category_name": category_id.upper(),
        "created_by": "admin",
        "created_at": at(0),
    }


def score_doc(
    sid: str, pid: str, cid: str, score: int, t: Optional[int], category_id: str = "gt1"
) -> Dict[str, Any]:
    return {
        "id": sid,
        "participant_id": pid,
        "competition_id": cid,
        "category_id": category_id,
        "score": score,
        "submitted_by": "admin",
        "timestamp": at(t),
    }


def mirror_of(participants=(), competitions=(), scores=()) -> SimpleNamespace:
    """A static stand-in for MirrorSet holding parsed records."""

    return SimpleNamespace(
        participants=tuple(participant_from_doc(doc) for doc in participants),
        competitions=tuple(competition_from_doc(doc) for doc in competitions),
        scores=tuple(score_from_doc(doc) for doc in scores),
    )


class FakeStore:
    """Record store whose snapshots are pushed by the test."""

    def __init__(self, app_id: str = APP_ID) -> None:
        self.app_id = app_id
        self.listeners: Dict[str, List[Tuple[Any, Any]]] = {}
        self.appended: List[Tuple[str, Dict[str, Any]]] = []
        self.subscribe_errors: Dict[str, Exception] = {}
        self.append_error: Optional[str] = None
        self.unsubscribe_calls = 0

    def path(self, collection: str) -> str:
        return collection_path(self.app_id, collection)

    def subscribe(self, path, on_next, on_error):
        if path in self.subscribe_errors:
            raise self.subscribe_errors[path]
        listener = (on_next, on_error)
        self.listeners.setdefault(path, []).append(listener)

        def unsubscribe():
            self.unsubscribe_calls += 1
            if listener in self.listeners.get(path, []):
                self.listeners[path].remove(listener)

        return unsubscribe

    def append(self, path, record) -> "Future[str]":
        future: "Future[str]" = Future()
        if self.append_error is not None:
            future.set_exception(WriteFailure(self.append_error))
            return future
        self.appended.append((path, record))
        future.set_result(f"rec-{len(self.appended)}")
        return future

    def emit(self, collection: str, docs, version: Optional[int] = None) -> None:
        path = self.path(collection)
        snapshot = Snapshot(collection=path, records=tuple(docs), version=version)
        for on_next, _ in list(self.listeners.get(path, [])):
            on_next(snapshot)

    def fail(self, collection: str, error: BaseException) -> None:
        for _, on_error in list(self.listeners.get(self.path(collection), [])):
            on_error(error)

    def active(self, collection: str) -> int:
        return len(self.listeners.get(self.path(collection), []))


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def coordinator(store):
    with ViewCoordinator(store, APP_ID, CATEGORIES) as coord:
        yield coord


@pytest.fixture
def seeded(store, coordinator):
    """Coordinator with every collection delivered once."""

    store.emit("participants", [participant_doc("p1", "Ann"), participant_doc("p2", "Bo")])
    store.emit("competitions", [competition_doc("c1", "gt1"), competition_doc("c2", "gt2")])
    store.emit("scores", [])
    return coordinator
