"""Stored blob model — index of objects held by the local object store."""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from phonedrop.models.base import Base


class StoredBlob(Base):
    __tablename__ = "stored_blobs"

    pathname: Mapped[str] = mapped_column(String(1024), primary_key=True)
    address: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    size_bytes: Mapped[int] = mapped_column(Integer, nullable=False)
    content_type: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<StoredBlob(pathname='{self.pathname}', size={self.size_bytes})>"
