"""Upload submitter — names, authorizes and forwards single-file uploads."""

from __future__ import annotations

import hmac
import logging
import mimetypes
import time
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Callable

from phonedrop.errors import BadRequest, PayloadTooLarge, StoreUnavailable, Unauthorized, UploadFailed

if TYPE_CHECKING:
    from phonedrop.services.object_store import ObjectStore, PutResult

logger = logging.getLogger(__name__)

MAX_NAME_BYTES = 255  # common filesystem limit for one path component


def clean_filename(filename: str | None) -> str:
    """Reduce a client-supplied name to a bare file name."""
    if not filename:
        return ""
    return PurePosixPath(filename.replace("\\", "/")).name.strip()


def fit_filename(name: str, max_bytes: int) -> str:
    """Shorten ``name`` to at most ``max_bytes`` of UTF-8, keeping its suffix."""
    if len(name.encode()) <= max_bytes:
        return name
    stem, dot, suffix = name.rpartition(".")
    tail = f"{dot}{suffix}" if stem and len(f"{dot}{suffix}".encode()) < max_bytes // 2 else ""
    if not tail:
        stem = name
    budget = max_bytes - len(tail.encode())
    return stem.encode()[:budget].decode(errors="ignore") + tail


class UploadService:
    """Turns one submitted file into one immutable, publicly readable object."""

    def __init__(
        self,
        store: ObjectStore,
        secret: str = "",
        max_bytes: int = 0,
        clock: Callable[[], float] = time.time,
    ):
        self._store = store
        self._secret = secret
        self._max_bytes = max_bytes
        self._clock = clock
        self._last_token = 0

    @property
    def requires_auth(self) -> bool:
        return bool(self._secret)

    def authorize(self, authorization: str | None) -> None:
        """Check ``Authorization: Bearer <secret>`` when a secret is configured."""
        if not self._secret:
            return
        expected = f"Bearer {self._secret}"
        if not authorization or not hmac.compare_digest(authorization, expected):
            raise Unauthorized("Unauthorized")

    def _next_token(self) -> int:
        """Millisecond timestamp, bumped so it never repeats within the process."""
        token = max(int(self._clock() * 1000), self._last_token + 1)
        self._last_token = token
        return token

    def check_size(self, size: int | None) -> None:
        """Reject payloads above the configured limit; unknown sizes pass."""
        if self._max_bytes and size is not None and size > self._max_bytes:
            raise PayloadTooLarge(f"File exceeds {self._max_bytes} bytes ({size} bytes)")

    def storage_name(self, filename: str) -> str:
        token = str(self._next_token())
        return f"{token}-{fit_filename(filename, MAX_NAME_BYTES - len(token) - 1)}"

    async def submit(self, filename: str | None, payload: bytes | None) -> PutResult:
        if payload is None:
            raise BadRequest("No file provided")
        name = clean_filename(filename)
        if not name:
            raise BadRequest("No file provided")
        self.check_size(len(payload))

        pathname = self.storage_name(name)
        content_type, _ = mimetypes.guess_type(name)
        try:
            result = await self._store.put(
                pathname, payload, public_read=True, content_type=content_type
            )
        except StoreUnavailable as e:
            logger.error("Upload error: %s", e)
            raise UploadFailed("Upload failed") from e

        logger.info("Upload accepted: %s -> %s", name, result.address)
        return result
