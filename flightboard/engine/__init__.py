"""Real-time leaderboard aggregation engine."""

from .coordinator import ViewCoordinator
from .deriver import derive, rank_entries
from .errors import StreamFailure, UnknownCategoryError, WriteFailure, WriteResult
from .mirror import MirrorSet
from .records import (
    Category,
    Competition,
    LeaderboardEntry,
    Participant,
    ScoreSubmission,
    Snapshot,
)
from .store import COLLECTIONS, SERVER_TIMESTAMP, RecordStore, collection_path

__all__ = [
    "COLLECTIONS",
    "Category",
    "Competition",
    "LeaderboardEntry",
    "MirrorSet",
    "Participant",
    "RecordStore",
    "SERVER_TIMESTAMP",
    "ScoreSubmission",
    "Snapshot",
    "StreamFailure",
    "UnknownCategoryError",
    "ViewCoordinator",
    "WriteFailure",
    "WriteResult",
    "collection_path",
    "derive",
    "rank_entries",
]
