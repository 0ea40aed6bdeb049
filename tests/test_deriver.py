"""Tests for leaderboard derivation."""

from __future__ import annotations

import random

from flightboard.engine import derive, rank_entries

from .conftest import at, competition_doc, mirror_of, participant_doc, score_doc

PARTICIPANTS = [participant_doc("p1", "Ann"), participant_doc("p2", "Bo")]


def _summary(entries):
    return [(entry.name, entry.high_score) for entry in entries]


def test_best_score_per_participant_wins():
    mirror = mirror_of(
        PARTICIPANTS,
        [competition_doc("c1", "gt1")],
        [
            score_doc("s1", "p1", "c1", 500, 10),
            score_doc("s2", "p2", "c1", 700, 5),
            score_doc("s3", "p1", "c1", 650, 20),
        ],
    )

    entries = derive(mirror, "gt1")

    assert _summary(entries) == [("Bo", 700), ("Ann", 650)]
    assert entries[1].last_updated == at(20)


def test_category_without_competitions_is_empty():
    mirror = mirror_of(
        PARTICIPANTS,
        [competition_doc("c1", "gt1")],
        [score_doc("s1", "p1", "c1", 500, 10, category_id="gt2")],
    )

    assert derive(mirror, "gt2") == []


def test_tie_ranks_most_recent_submission_first():
    # Deliberately reproduced: at equal scores the later submission ranks higher.
    mirror = mirror_of(
        PARTICIPANTS,
        [competition_doc("c1", "gt1")],
        [
            score_doc("s1", "p1", "c1", 800, 1),
            score_doc("s2", "p2", "c1", 800, 2),
        ],
    )

    assert [entry.id for entry in derive(mirror, "gt1")] == ["p2", "p1"]


def test_tie_without_timestamp_ranks_below_known_timestamp():
    mirror = mirror_of(
        PARTICIPANTS,
        [competition_doc("c1", "gt1")],
        [
            score_doc("s1", "p1", "c1", 800, 1),
            score_doc("s2", "p2", "c1", 800, None),
        ],
    )

    entries = derive(mirror, "gt1")

    assert [entry.id for entry in entries] == ["p1", "p2"]
    assert entries[1].last_updated is None


def test_equal_best_scores_keep_latest_timestamp():
    mirror = mirror_of(
        PARTICIPANTS,
        [competition_doc("c1", "gt1")],
        [
            score_doc("s1", "p1", "c1", 900, 30),
            score_doc("s2", "p1", "c1", 900, 50),
            score_doc("s3", "p1", "c1", 900, 40),
        ],
    )

    (entry,) = derive(mirror, "gt1")
    assert entry.high_score == 900
    assert entry.last_updated == at(50)


def test_best_score_spans_all_competitions_in_category():
    mirror = mirror_of(
        PARTICIPANTS,
        [
            competition_doc("c1", "gt1"),
            competition_doc("c2", "gt1"),
            competition_doc("c3", "gt2"),
        ],
        [
            score_doc("s1", "p1", "c1", 300, 1),
            score_doc("s2", "p1", "c2", 450, 2),
            score_doc("s3", "p1", "c3", 999, 3, category_id="gt2"),
        ],
    )

    assert _summary(derive(mirror, "gt1")) == [("Ann", 450)]
    assert _summary(derive(mirror, "gt2")) == [("Ann", 999)]


def test_participants_without_scores_are_not_ranked():
    mirror = mirror_of(
        PARTICIPANTS + [participant_doc("p3", "Cy")],
        [competition_doc("c1", "gt1")],
        [score_doc("s1", "p1", "c1", 100, 1)],
    )

    assert [entry.id for entry in derive(mirror, "gt1")] == ["p1"]


def test_submission_for_unmirrored_participant_is_ignored():
    mirror = mirror_of(
        PARTICIPANTS,
        [competition_doc("c1", "gt1")],
        [
            score_doc("s1", "ghost", "c1", 5000, 1),
            score_doc("s2", "p2", "c1", 10, 1),
        ],
    )

    assert _summary(derive(mirror, "gt1")) == [("Bo", 10)]


def test_submission_for_unmirrored_competition_is_ignored():
    mirror = mirror_of(
        PARTICIPANTS,
        [competition_doc("c1", "gt1")],
        [score_doc("s1", "p1", "c-missing", 5000, 1)],
    )

    assert derive(mirror, "gt1") == []


def test_competition_outside_category_set_is_excluded():
    mirror = mirror_of(
        PARTICIPANTS,
        [competition_doc("c9", "gt9")],
        [score_doc("s1", "p1", "c9", 100, 1, category_id="gt9")],
    )

    assert derive(mirror, "gt1") == []
    assert derive(mirror, "gt2") == []


def test_derivation_is_repeatable_and_ordered():
    rng = random.Random(7)
    participants = [participant_doc(f"p{i}", f"Pilot {i}") for i in range(12)]
    competitions = [competition_doc("c1", "gt1"), competition_doc("c2", "gt1")]
    scores = [
        score_doc(
            f"s{i}",
            f"p{rng.randrange(12)}",
            rng.choice(["c1", "c2"]),
            rng.randrange(1, 20) * 50,
            rng.choice([None, rng.randrange(100)]),
        )
        for i in range(60)
    ]
    mirror = mirror_of(participants, competitions, scores)

    first = derive(mirror, "gt1")
    assert derive(mirror, "gt1") == first

    for participant_id in {entry.id for entry in first}:
        expected = max(
            s["score"] for s in scores if s["participant_id"] == participant_id
        )
        assert next(e for e in first if e.id == participant_id).high_score == expected

    def key(entry):
        return (entry.high_score, entry.last_updated.timestamp() if entry.last_updated else float("-inf"))

    for earlier, later in zip(first, first[1:]):
        assert key(earlier) >= key(later)


def test_rank_entries_is_one_based():
    mirror = mirror_of(
        PARTICIPANTS,
        [competition_doc("c1", "gt1")],
        [
            score_doc("s1", "p1", "c1", 100, 1),
            score_doc("s2", "p2", "c1", 200, 1),
        ],
    )

    ranked = rank_entries(derive(mirror, "gt1"))

    assert [(rank, entry.name) for rank, entry in ranked] == [(1, "Bo"), (2, "Ann")]
