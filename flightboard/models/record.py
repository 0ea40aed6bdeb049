"""Database model for documents held by the SQL record store."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


def _new_record_id() -> str:
    return uuid4().hex


class StoredRecord(SQLModel, table=True):
    """One document in a collection, stored as JSON."""

    seq: Optional[int] = ORMField(default=None, primary_key=True)
    id: str = ORMField(default_factory=_new_record_id, index=True, unique=True)
    collection: str = ORMField(index=True)
    data_json: str
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["StoredRecord"]
