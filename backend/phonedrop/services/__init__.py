"""Business logic services — singleton registry."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from phonedrop.config import settings

if TYPE_CHECKING:
    from phonedrop.services.object_store import LocalObjectStore
    from phonedrop.services.upload_service import UploadService

logger = logging.getLogger(__name__)

_object_store: LocalObjectStore | None = None
_upload_service: UploadService | None = None


async def init_services() -> None:
    """Create and wire up all service singletons."""
    global _object_store, _upload_service

    from phonedrop.database import async_session, init_db
    from phonedrop.services.object_store import LocalObjectStore
    from phonedrop.services.upload_service import UploadService

    Path(settings.blob_dir).mkdir(parents=True, exist_ok=True)
    await init_db()

    _object_store = LocalObjectStore(
        session_factory=async_session,
        blob_dir=settings.blob_dir,
        public_base_url=settings.public_base_url,
    )
    _upload_service = UploadService(
        store=_object_store,
        secret=settings.upload_secret,
        max_bytes=settings.max_upload_bytes,
    )

    if settings.upload_secret:
        logger.info("Upload auth enabled (bearer secret)")
    else:
        logger.warning(
            "No upload secret configured (PHONEDROP_UPLOAD_SECRET) — "
            "anyone on the network can upload"
        )


async def shutdown_services() -> None:
    """Dispose the database engine."""
    global _object_store, _upload_service
    from phonedrop.database import engine

    _object_store = None
    _upload_service = None
    await engine.dispose()


def get_object_store() -> LocalObjectStore:
    if _object_store is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _object_store


def get_upload_service() -> UploadService:
    if _upload_service is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _upload_service
