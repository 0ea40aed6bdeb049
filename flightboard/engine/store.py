"""Capabilities the engine consumes from the external record store."""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Callable, Dict, Protocol

from .records import Snapshot

PARTICIPANTS = "participants"
COMPETITIONS = "competitions"
SCORES = "scores"

COLLECTIONS = (PARTICIPANTS, COMPETITIONS, SCORES)

OnNext = Callable[[Snapshot], None]
OnError = Callable[[BaseException], None]
Unsubscribe = Callable[[], None]
ChangeStreamSource = Callable[[OnNext, OnError], Unsubscribe]


class _ServerTimestamp:
    """Placeholder the store replaces with its commit time."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


class RecordStore(Protocol):
    def subscribe(self, path: str, on_next: OnNext, on_error: OnError) -> Unsubscribe:
        ...

    def append(self, path: str, record: Dict[str, Any]) -> "Future[str]":
        ...


def collection_path(app_id: str, collection: str) -> str:
    """Return the store path of ``collection`` under the ``app_id`` partition."""

    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection: {collection}")
    return f"artifacts/{app_id}/public/data/{collection}"


__all__ = [
    "COLLECTIONS",
    "COMPETITIONS",
    "ChangeStreamSource",
    "OnError",
    "OnNext",
    "PARTICIPANTS",
    "RecordStore",
    "SCORES",
    "SERVER_TIMESTAMP",
    "Unsubscribe",
    "collection_path",
]
