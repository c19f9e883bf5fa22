"""Object store gateway — named blobs on disk, metadata indexed in SQLite."""

from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol
from urllib.parse import quote

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from phonedrop.errors import BlobNotFound, DeleteFailed, ListUnavailable, UploadFailed
from phonedrop.models.blob import StoredBlob

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PutResult:
    address: str
    pathname: str


@dataclass(frozen=True)
class BlobInfo:
    address: str
    pathname: str
    uploaded_at: datetime
    size_bytes: int
    content_type: str | None = None


class ObjectStore(Protocol):
    """list/put/delete/read service used by the HTTP layer."""

    async def put(
        self,
        pathname: str,
        payload: bytes,
        *,
        public_read: bool = True,
        content_type: str | None = None,
    ) -> PutResult: ...

    async def list(self) -> list[BlobInfo]: ...

    async def delete(self, address: str) -> None: ...

    async def read(self, pathname: str) -> tuple[BlobInfo, Path]: ...


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_info(row: StoredBlob) -> BlobInfo:
    return BlobInfo(
        address=row.address,
        pathname=row.pathname,
        uploaded_at=_as_utc(row.uploaded_at),
        size_bytes=row.size_bytes,
        content_type=row.content_type,
    )


class LocalObjectStore:
    """Stores blobs under ``blob_dir`` and addresses them by public URL.

    Objects are immutable: a put onto an existing pathname is rejected
    rather than overwriting.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        blob_dir: str | Path,
        public_base_url: str,
    ):
        self._sessions = session_factory
        self._blob_dir = Path(blob_dir)
        self._base_url = public_base_url.rstrip("/")

    def address_for(self, pathname: str) -> str:
        return f"{self._base_url}/blobs/{quote(pathname)}"

    def _path_for(self, pathname: str) -> Path:
        path = (self._blob_dir / pathname).resolve()
        if self._blob_dir.resolve() not in path.parents:
            raise BlobNotFound(pathname)
        return path

    async def put(
        self,
        pathname: str,
        payload: bytes,
        *,
        public_read: bool = True,
        content_type: str | None = None,
    ) -> PutResult:
        try:
            path = self._path_for(pathname)
        except BlobNotFound as e:
            raise UploadFailed(f"Invalid pathname: {pathname}") from e

        address = self.address_for(pathname)
        try:
            async with self._sessions() as db:
                if await db.get(StoredBlob, pathname) is not None:
                    raise UploadFailed(f"Object already exists: {pathname}")

                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_bytes(payload)

                db.add(
                    StoredBlob(
                        pathname=pathname,
                        address=address,
                        size_bytes=len(payload),
                        content_type=content_type,
                        public=public_read,
                        uploaded_at=datetime.now(timezone.utc),
                    )
                )
                await db.commit()
        except (OSError, SQLAlchemyError) as e:
            with contextlib.suppress(OSError):
                path.unlink(missing_ok=True)
            raise UploadFailed(str(e)) from e

        logger.info("Stored %s (%d bytes)", pathname, len(payload))
        return PutResult(address=address, pathname=pathname)

    async def list(self) -> list[BlobInfo]:
        try:
            async with self._sessions() as db:
                result = await db.execute(
                    select(StoredBlob).order_by(StoredBlob.uploaded_at.desc())
                )
                rows = result.scalars().all()
        except SQLAlchemyError as e:
            raise ListUnavailable(str(e)) from e
        return [_to_info(row) for row in rows]

    async def delete(self, address: str) -> None:
        try:
            async with self._sessions() as db:
                result = await db.execute(
                    select(StoredBlob).where(StoredBlob.address == address)
                )
                row = result.scalar_one_or_none()
                if row is None:
                    raise BlobNotFound(address)

                self._path_for(row.pathname).unlink(missing_ok=True)
                await db.delete(row)
                await db.commit()
        except (OSError, SQLAlchemyError) as e:
            raise DeleteFailed(str(e)) from e

        logger.info("Deleted %s", address)

    async def read(self, pathname: str) -> tuple[BlobInfo, Path]:
        """Resolve a public blob to its metadata and on-disk path."""
        try:
            async with self._sessions() as db:
                row = await db.get(StoredBlob, pathname)
        except SQLAlchemyError as e:
            raise BlobNotFound(pathname) from e

        if row is None or not row.public:
            raise BlobNotFound(pathname)
        path = self._path_for(pathname)
        if not path.is_file():
            raise BlobNotFound(pathname)
        return _to_info(row), path
