"""Local mirror of the three source collections."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from .errors import StreamFailure
from .records import PARSERS, Competition, Participant, ScoreSubmission, Snapshot
from .store import COLLECTIONS, COMPETITIONS, PARTICIPANTS, SCORES, ChangeStreamSource, Unsubscribe

logger = logging.getLogger(__name__)

ChangeListener = Callable[[str], None]
ErrorListener = Callable[[StreamFailure], None]


class MirrorSet:
    """Holds the latest full snapshot of each collection.

    Every snapshot replaces its collection's slot wholesale. Each collection has
    one subscription writing to its slot, and a failing stream keeps its last
    good snapshot.
    """

    def __init__(self) -> None:
        self._slots: Dict[str, Tuple[Any, ...]] = {name: () for name in COLLECTIONS}
        self._versions: Dict[str, Optional[int]] = {name: None for name in COLLECTIONS}
        self._received: set[str] = set()
        self._unsubscribers: Dict[str, Unsubscribe] = {}
        self._listeners: List[ChangeListener] = []
        self._error_listeners: List[ErrorListener] = []
        self._detached = False

    # Subscriptions ---------------------------------------------------------

    def attach(self, collection: str, source: ChangeStreamSource) -> None:
        """Subscribe ``collection`` to ``source``."""

        if collection not in self._slots:
            raise ValueError(f"Unknown collection: {collection}")
        if self._detached:
            raise RuntimeError("MirrorSet has been detached")
        if collection in self._unsubscribers:
            raise RuntimeError(f"Collection already attached: {collection}")

        def on_next(snapshot: Snapshot) -> None:
            self._apply(collection, snapshot)

        def on_error(error: BaseException) -> None:
            self._fail(collection, error)

        try:
            unsubscribe = source(on_next, on_error)
        except Exception as exc:
            self._fail(collection, exc)
            return
        self._unsubscribers[collection] = unsubscribe
        logger.debug("Attached %s", collection)

    def detach(self) -> None:
        """Stop every subscription. Safe to call more than once."""

        if self._detached:
            return
        self._detached = True
        unsubscribers, self._unsubscribers = self._unsubscribers, {}
        for collection, unsubscribe in unsubscribers.items():
            try:
                unsubscribe()
            except Exception:
                logger.exception("Failed to unsubscribe from %s", collection)
        logger.debug("Detached %d subscriptions", len(unsubscribers))

    @property
    def detached(self) -> bool:
        return self._detached

    # Listeners -------------------------------------------------------------

    def add_listener(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def add_error_listener(self, listener: ErrorListener) -> None:
        self._error_listeners.append(listener)

    # Snapshot handling -----------------------------------------------------

    def _apply(self, collection: str, snapshot: Snapshot) -> None:
        if self._detached:
            return

        last_version = self._versions[collection]
        if (
            snapshot.version is not None
            and last_version is not None
            and snapshot.version <= last_version
        ):
            logger.debug(
                "Discarding stale %s snapshot v%s (have v%s)",
                collection,
                snapshot.version,
                last_version,
            )
            return

        parse = PARSERS[collection]
        records = []
        skipped: List[str] = []
        for doc in snapshot.records:
            try:
                records.append(parse(doc))
            except (KeyError, TypeError, ValueError) as exc:
                doc_id = doc.get("id", "?") if isinstance(doc, dict) else "?"
                logger.warning("Skipping malformed %s document %s: %s", collection, doc_id, exc)
                skipped.append(f"{doc_id}: {exc}")

        self._slots[collection] = tuple(records)
        self._versions[collection] = snapshot.version
        self._received.add(collection)
        logger.debug("Mirrored %d %s", len(records), collection)

        for listener in list(self._listeners):
            try:
                listener(collection)
            except Exception:
                logger.exception("Mirror change listener failed for %s", collection)

        if skipped:
            self._fail(
                collection,
                ValueError(f"skipped {len(skipped)} malformed document(s): " + "; ".join(skipped)),
            )

    def _fail(self, collection: str, error: BaseException) -> None:
        if self._detached:
            return
        failure = StreamFailure(collection=collection, message=str(error) or type(error).__name__)
        logger.error("Error fetching %s: %s", collection, failure.message)
        for listener in list(self._error_listeners):
            try:
                listener(failure)
            except Exception:
                logger.exception("Stream error listener failed for %s", collection)

    # Read access -----------------------------------------------------------

    @property
    def participants(self) -> Tuple[Participant, ...]:
        return self._slots[PARTICIPANTS]

    @property
    def competitions(self) -> Tuple[Competition, ...]:
        return self._slots[COMPETITIONS]

    @property
    def scores(self) -> Tuple[ScoreSubmission, ...]:
        return self._slots[SCORES]

    def has_snapshot(self, collection: str) -> bool:
        return collection in self._received

    @property
    def is_ready(self) -> bool:
        """Competitions carry the category ids every leaderboard depends on."""

        return self.has_snapshot(COMPETITIONS)


__all__ = ["ChangeListener", "ErrorListener", "MirrorSet"]
