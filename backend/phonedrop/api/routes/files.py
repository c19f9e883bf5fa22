"""Listing and delete endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from phonedrop.errors import BlobNotFound, DeleteFailed, ListUnavailable
from phonedrop.schemas.files import DeleteRequest, DeleteResponse, FileListResponse, FileRecord
from phonedrop.services import get_object_store
from phonedrop.services.object_store import ObjectStore

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/files", response_model=FileListResponse)
async def list_files(store: ObjectStore = Depends(get_object_store)):
    """Full snapshot of stored objects, newest first."""
    try:
        blobs = await store.list()
    except ListUnavailable as e:
        logger.error("List error: %s", e)
        raise HTTPException(500, "Failed to list files")

    blobs.sort(key=lambda b: b.uploaded_at, reverse=True)
    return FileListResponse(
        files=[
            FileRecord(
                address=b.address,
                display_name=b.pathname,
                uploaded_at=b.uploaded_at,
                size_bytes=b.size_bytes,
            )
            for b in blobs
        ]
    )


@router.post("/delete", response_model=DeleteResponse)
async def delete_file(body: DeleteRequest, store: ObjectStore = Depends(get_object_store)):
    """Remove one object by address."""
    if not body.url:
        raise HTTPException(400, "No url provided")
    try:
        await store.delete(body.url)
    except BlobNotFound:
        raise HTTPException(404, "File not found")
    except DeleteFailed as e:
        logger.error("Delete error: %s", e)
        raise HTTPException(500, "Delete failed")
    return DeleteResponse()
