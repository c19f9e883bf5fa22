"""Raw content retrieval — plain GET on an object's address."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from phonedrop.errors import BlobNotFound
from phonedrop.services import get_object_store
from phonedrop.services.object_store import ObjectStore

router = APIRouter()


@router.get("/blobs/{pathname:path}")
async def read_blob(pathname: str, store: ObjectStore = Depends(get_object_store)):
    try:
        info, path = await store.read(pathname)
    except BlobNotFound:
        raise HTTPException(404, "Not found")
    return FileResponse(path, media_type=info.content_type or "application/octet-stream")
