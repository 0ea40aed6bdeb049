"""Database model exports."""

from .record import StoredRecord

__all__ = ["StoredRecord"]
