"""FastAPI dependencies — upload auth."""

from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, Request, status

from phonedrop.errors import Unauthorized
from phonedrop.services import get_upload_service
from phonedrop.services.upload_service import UploadService

logger = logging.getLogger(__name__)


async def verify_upload_token(
    request: Request,
    service: UploadService = Depends(get_upload_service),
) -> None:
    """Reject uploads without the shared bearer secret, before the body is read."""
    try:
        service.authorize(request.headers.get("authorization"))
    except Unauthorized:
        logger.warning("Rejected upload from %s: bad credential", request.client.host if request.client else "-")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
