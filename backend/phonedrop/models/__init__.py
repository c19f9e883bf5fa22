"""SQLAlchemy ORM models for PhoneDrop."""

from phonedrop.models.base import Base
from phonedrop.models.blob import StoredBlob

__all__ = [
    "Base",
    "StoredBlob",
]
