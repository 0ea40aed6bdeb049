"""Keeps derived leaderboards current as the mirrored collections change."""

from __future__ import annotations

import logging
from functools import partial
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .deriver import derive
from .errors import StreamFailure, UnknownCategoryError
from .mirror import MirrorSet
from .records import Category, Competition, LeaderboardEntry, Participant
from .store import COLLECTIONS, RecordStore, collection_path

logger = logging.getLogger(__name__)

Observer = Callable[["ViewCoordinator"], None]
FailureObserver = Callable[[StreamFailure], None]


class ViewCoordinator:
    """Owns a :class:`MirrorSet` and the ranked view of every category.

    Any mirror change re-derives all categories and then notifies observers.
    Use as a context manager (or call :meth:`close`) so the subscriptions are
    released on every exit path.
    """

    def __init__(
        self,
        store: RecordStore,
        app_id: str,
        categories: Iterable[Category],
    ) -> None:
        self.app_id = app_id
        self._categories: Tuple[Category, ...] = tuple(categories)
        self._views: Dict[str, List[LeaderboardEntry]] = {
            category.id: [] for category in self._categories
        }
        self._failures: Dict[str, StreamFailure] = {}
        self._observers: List[Observer] = []
        self._failure_observers: List[FailureObserver] = []

        self._mirror = MirrorSet()
        self._mirror.add_listener(self._on_change)
        self._mirror.add_error_listener(self._on_failure)
        try:
            for collection in COLLECTIONS:
                path = collection_path(app_id, collection)
                self._mirror.attach(collection, partial(store.subscribe, path))
        except BaseException:
            self._mirror.detach()
            raise
        logger.info("Leaderboard views attached for %s", app_id)

    # Lifecycle -------------------------------------------------------------

    def close(self) -> None:
        self._mirror.detach()

    def __enter__(self) -> "ViewCoordinator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Observers -------------------------------------------------------------

    def subscribe(
        self,
        observer: Observer,
        on_failure: Optional[FailureObserver] = None,
    ) -> Callable[[], None]:
        """Call ``observer`` after every recomputation and ``on_failure`` on
        every stream failure; returns an unsubscribe."""

        self._observers.append(observer)
        if on_failure is not None:
            self._failure_observers.append(on_failure)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)
            if on_failure is not None and on_failure in self._failure_observers:
                self._failure_observers.remove(on_failure)

        return unsubscribe

    # Mirror callbacks ------------------------------------------------------

    def _on_change(self, collection: str) -> None:
        self._failures.pop(collection, None)
        self._recompute()
        for observer in list(self._observers):
            try:
                observer(self)
            except Exception:
                logger.exception("Leaderboard observer failed")

    def _on_failure(self, failure: StreamFailure) -> None:
        self._failures[failure.collection] = failure
        for on_failure in list(self._failure_observers):
            try:
                on_failure(failure)
            except Exception:
                logger.exception("Stream failure observer failed")

    def _recompute(self) -> None:
        self._views = {
            category.id: derive(self._mirror, category.id) for category in self._categories
        }

    # Read access -----------------------------------------------------------

    @property
    def categories(self) -> Tuple[Category, ...]:
        return self._categories

    def category(self, category_id: str) -> Category:
        for category in self._categories:
            if category.id == category_id:
                return category
        raise UnknownCategoryError(category_id)

    def current_view(self, category_id: str) -> List[LeaderboardEntry]:
        """Latest derived leaderboard for ``category_id``."""

        try:
            return list(self._views[category_id])
        except KeyError:
            raise UnknownCategoryError(category_id) from None

    def competitions_for(self, category_id: str) -> List[Competition]:
        self.category(category_id)
        return [c for c in self._mirror.competitions if c.category_id == category_id]

    @property
    def participants(self) -> Sequence[Participant]:
        return self._mirror.participants

    @property
    def competitions(self) -> Sequence[Competition]:
        return self._mirror.competitions

    def find_participant(self, participant_id: str) -> Optional[Participant]:
        return next((p for p in self._mirror.participants if p.id == participant_id), None)

    def find_competition(self, competition_id: str) -> Optional[Competition]:
        return next((c for c in self._mirror.competitions if c.id == competition_id), None)

    def has_snapshot(self, collection: str) -> bool:
        return self._mirror.has_snapshot(collection)

    @property
    def ready(self) -> bool:
        """True once all three collections have delivered a snapshot."""

        return all(self._mirror.has_snapshot(name) for name in COLLECTIONS)

    @property
    def loading(self) -> bool:
        return not self.ready

    @property
    def failures(self) -> Dict[str, StreamFailure]:
        return dict(self._failures)


__all__ = ["FailureObserver", "Observer", "ViewCoordinator"]
