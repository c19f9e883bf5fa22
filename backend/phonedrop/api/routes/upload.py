"""Upload endpoint — single multipart file from the phone."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.datastructures import UploadFile

from phonedrop.api.deps import verify_upload_token
from phonedrop.errors import BadRequest, PayloadTooLarge, UploadFailed
from phonedrop.schemas.files import UploadResponse
from phonedrop.services import get_upload_service
from phonedrop.services.upload_service import UploadService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/upload",
    response_model=UploadResponse,
    dependencies=[Depends(verify_upload_token)],
)
async def upload_file(
    request: Request,
    service: UploadService = Depends(get_upload_service),
):
    """Store one file under a timestamp-prefixed name with public read access."""
    form = await request.form()
    upload = form.get("file")
    if not isinstance(upload, UploadFile):
        raise HTTPException(400, "No file provided")

    try:
        # Spooled size is known before the body is buffered
        service.check_size(upload.size)
        payload = await upload.read()
        result = await service.submit(upload.filename, payload)
    except PayloadTooLarge as e:
        raise HTTPException(413, str(e))
    except BadRequest as e:
        raise HTTPException(400, str(e))
    except UploadFailed:
        raise HTTPException(500, "Upload failed")
    finally:
        await form.close()

    return UploadResponse(url=result.address, pathname=result.pathname)
