"""The fixed set of leaderboard categories."""

from __future__ import annotations

from typing import Tuple

from ..engine.records import Category

CATEGORIES: Tuple[Category, ...] = (
    Category(
        id="gt1",
        name="Ground Trainer 1",
        description="Focuses on core landing skills.",
    ),
    Category(
        id="gt2",
        name="Ground Trainer 2",
        description="Advanced challenges with tricky conditions.",
    ),
)


__all__ = ["CATEGORIES"]
