"""Pure derivation of a category leaderboard from mirrored collections."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from .records import Competition, LeaderboardEntry, Participant, ScoreSubmission


class MirrorContents(Protocol):
    @property
    def participants(self) -> Sequence[Participant]: ...

    @property
    def competitions(self) -> Sequence[Competition]: ...

    @property
    def scores(self) -> Sequence[ScoreSubmission]: ...


def _time_key(timestamp: Optional[datetime]) -> float:
    # Uncommitted timestamps rank as the earliest possible.
    if timestamp is None:
        return float("-inf")
    return timestamp.timestamp()


def _beats(candidate: ScoreSubmission, current: ScoreSubmission) -> bool:
    if candidate.score != current.score:
        return candidate.score > current.score
    return _time_key(candidate.timestamp) > _time_key(current.timestamp)


def best_submissions(
    scores: Iterable[ScoreSubmission], competition_ids: Iterable[str]
) -> Dict[str, ScoreSubmission]:
    """Return each participant's best submission across ``competition_ids``.

    Higher score wins; on equal scores the most recent timestamp wins.
    """

    allowed = set(competition_ids)
    best: Dict[str, ScoreSubmission] = {}
    for submission in scores:
        if submission.competition_id not in allowed or submission.score <= 0:
            continue
        current = best.get(submission.participant_id)
        if current is None or _beats(submission, current):
            best[submission.participant_id] = submission
    return best


def derive(mirror: MirrorContents, category_id: str) -> List[LeaderboardEntry]:
    """Rank every participant with a qualifying score in ``category_id``.

    Entries are ordered by high score, then by most recent ``last_updated``.
    The list position is the rank. Submissions referencing a participant that
    is not mirrored yet contribute nothing.
    """

    competition_ids = {
        competition.id
        for competition in mirror.competitions
        if competition.category_id == category_id
    }
    if not competition_ids:
        return []

    best = best_submissions(mirror.scores, competition_ids)

    entries: List[LeaderboardEntry] = []
    for participant in mirror.participants:
        submission = best.get(participant.id)
        high_score = submission.score if submission else 0
        if high_score <= 0:
            continue
        entries.append(
            LeaderboardEntry(
                id=participant.id,
                name=participant.name,
                high_score=high_score,
                last_updated=submission.timestamp,
            )
        )

    entries.sort(key=lambda entry: (entry.high_score, _time_key(entry.last_updated)), reverse=True)
    return entries


def rank_entries(entries: Iterable[LeaderboardEntry]) -> List[Tuple[int, LeaderboardEntry]]:
    """Pair entries with their 1-based rank."""

    return list(enumerate(entries, start=1))


__all__ = ["MirrorContents", "best_submissions", "derive", "rank_entries"]
