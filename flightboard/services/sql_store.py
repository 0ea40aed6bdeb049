"""Record store backed by a SQLModel table of JSON documents.

Implements the subscribe/append capabilities the leaderboard engine consumes.
Every append to a collection path pushes the complete, freshly read collection
to that path's subscribers. Appends, subscription changes and deliveries share
one lock, so callbacks never overlap and none fire after an unsubscribe
returns.
"""

from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import Future
from datetime import datetime
from typing import Any, Dict, List, Tuple

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..core.time import utcnow
from ..engine.errors import WriteFailure
from ..engine.records import Snapshot
from ..engine.store import SERVER_TIMESTAMP, OnError, OnNext, Unsubscribe
from ..models import StoredRecord

logger = logging.getLogger(__name__)


def _encode_value(value: Any, committed_at: datetime) -> Any:
    if value is SERVER_TIMESTAMP:
        return committed_at.isoformat()
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class SqlRecordStore:
    """Collections of JSON documents keyed by path, with full-snapshot push."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._lock = threading.RLock()
        self._listeners: Dict[str, List[Tuple[OnNext, OnError]]] = {}
        self._versions: Dict[str, int] = {}

    # Subscriptions ---------------------------------------------------------

    def subscribe(self, path: str, on_next: OnNext, on_error: OnError) -> Unsubscribe:
        """Register for full snapshots of ``path``; the current one is sent at once."""

        listener = (on_next, on_error)
        with self._lock:
            self._listeners.setdefault(path, []).append(listener)
            self._deliver(path, [listener])

        def unsubscribe() -> None:
            with self._lock:
                listeners = self._listeners.get(path, [])
                if listener in listeners:
                    listeners.remove(listener)

        return unsubscribe

    def subscriber_count(self, path: str) -> int:
        with self._lock:
            return len(self._listeners.get(path, []))

    # Writes ----------------------------------------------------------------

    def append(self, path: str, record: Dict[str, Any]) -> "Future[str]":
        """Store ``record`` under ``path`` and resolve to its new id."""

        future: "Future[str]" = Future()
        with self._lock:
            committed_at = utcnow()
            data = {key: _encode_value(value, committed_at) for key, value in record.items()}
            try:
                with Session(self._engine) as session:
                    row = StoredRecord(
                        collection=path,
                        data_json=json.dumps(data),
                        created_at=committed_at,
                    )
                    session.add(row)
                    session.commit()
                    session.refresh(row)
                    record_id = row.id
            except (SQLAlchemyError, TypeError, ValueError) as exc:
                logger.error("Append to %s failed: %s", path, exc)
                future.set_exception(WriteFailure(str(exc)))
                return future

            future.set_result(record_id)
            self._deliver(path, list(self._listeners.get(path, [])))
        return future

    # Delivery --------------------------------------------------------------

    def read(self, path: str) -> Tuple[Dict[str, Any], ...]:
        """Return every document currently stored under ``path``."""

        with Session(self._engine) as session:
            rows = session.exec(
                select(StoredRecord)
                .where(StoredRecord.collection == path)
                .order_by(StoredRecord.seq)
            ).all()
            return tuple({**json.loads(row.data_json), "id": row.id} for row in rows)

    def _deliver(self, path: str, listeners: List[Tuple[OnNext, OnError]]) -> None:
        if not listeners:
            return
        try:
            records = self.read(path)
        except (SQLAlchemyError, ValueError) as exc:
            for _, on_error in listeners:
                self._call(path, on_error, exc)
            return

        version = self._versions.get(path, 0) + 1
        self._versions[path] = version
        snapshot = Snapshot(collection=path, records=records, version=version)
        for on_next, _ in listeners:
            self._call(path, on_next, snapshot)

    def _call(self, path: str, callback, payload) -> None:
        try:
            callback(payload)
        except Exception:
            logger.exception("Subscriber for %s failed", path)


__all__ = ["SqlRecordStore"]
