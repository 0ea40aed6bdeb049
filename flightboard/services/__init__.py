"""Service layer helpers."""

from .sql_store import SqlRecordStore
from .views import (
    category_to_dict,
    competition_to_dict,
    entry_to_dict,
    leaderboard_to_dict,
    participant_to_dict,
)
from .writes import NOT_FOUND, RecordWriter

__all__ = [
    "NOT_FOUND",
    "RecordWriter",
    "SqlRecordStore",
    "category_to_dict",
    "competition_to_dict",
    "entry_to_dict",
    "leaderboard_to_dict",
    "participant_to_dict",
]
