"""Failure types reported by the aggregation engine and its stores."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class WriteFailure(Exception):
    """Raised by a store when an append is rejected."""


class UnknownCategoryError(KeyError):
    """Lookup against an id outside the fixed category set."""


@dataclass(frozen=True)
class StreamFailure:
    """A collection subscription errored; its last good snapshot stays in place."""

    collection: str
    message: str


@dataclass(frozen=True)
class WriteResult:
    ok: bool
    record_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, record_id: str) -> "WriteResult":
        return cls(ok=True, record_id=record_id)

    @classmethod
    def failure(cls, error: str) -> "WriteResult":
        return cls(ok=False, error=error)


__all__ = ["StreamFailure", "UnknownCategoryError", "WriteFailure", "WriteResult"]
