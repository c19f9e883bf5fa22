"""HTTP gateway — the dashboard's view of the upload server."""

from __future__ import annotations

import logging
import mimetypes

import httpx
from pydantic import ValidationError

from phonedrop.config import settings
from phonedrop.errors import (
    BadRequest,
    BlobNotFound,
    DeleteFailed,
    FetchFailed,
    ListUnavailable,
    PayloadTooLarge,
    Unauthorized,
    UploadFailed,
)
from phonedrop.schemas.files import FileListResponse, FileRecord, UploadResponse

logger = logging.getLogger(__name__)


class HttpGateway:
    """list / delete / read / upload against a PhoneDrop server.

    Each call opens its own short-lived client; ``transport`` lets tests
    route requests straight into an ASGI app.
    """

    def __init__(
        self,
        base_url: str | None = None,
        upload_secret: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.server_url).rstrip("/")
        self._secret = settings.upload_secret if upload_secret is None else upload_secret
        self._timeout = timeout or settings.request_timeout_seconds
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def list(self) -> list[FileRecord]:
        """Full snapshot as served by the listing endpoint."""
        try:
            async with self._client() as client:
                resp = await client.get(f"{self._base_url}/api/files")
            resp.raise_for_status()
            return FileListResponse.model_validate(resp.json()).files
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            raise ListUnavailable(str(e)) from e

    async def delete(self, address: str) -> None:
        try:
            async with self._client() as client:
                resp = await client.post(
                    f"{self._base_url}/api/delete",
                    json={"url": address},
                )
            if resp.status_code == 404:
                raise BlobNotFound(address)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise DeleteFailed(str(e)) from e

    async def read_text(self, address: str) -> str:
        """Plain GET on the object's address, decoded as text."""
        try:
            async with self._client() as client:
                resp = await client.get(address)
            resp.raise_for_status()
            return resp.text
        except httpx.HTTPError as e:
            raise FetchFailed(f"{address}: {e}") from e

    async def upload(self, filename: str, payload: bytes) -> UploadResponse:
        """Submit one file the way the phone does."""
        headers = {}
        if self._secret:
            headers["Authorization"] = f"Bearer {self._secret}"
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"

        try:
            async with self._client() as client:
                resp = await client.post(
                    f"{self._base_url}/api/upload",
                    files={"file": (filename, payload, content_type)},
                    headers=headers,
                )
        except httpx.HTTPError as e:
            raise UploadFailed(str(e)) from e

        if resp.status_code == 401:
            raise Unauthorized("Upload rejected: bad or missing secret")
        if resp.status_code == 413:
            raise PayloadTooLarge(_detail(resp))
        if resp.status_code == 400:
            raise BadRequest(_detail(resp))
        if resp.status_code != 200:
            raise UploadFailed(f"HTTP {resp.status_code}: {_detail(resp)}")
        return UploadResponse.model_validate(resp.json())


def _detail(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text
    if isinstance(data, dict) and "detail" in data:
        return str(data["detail"])
    return resp.text
