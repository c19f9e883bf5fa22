"""File schemas — wire format of the upload, listing and delete endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FileRecord(BaseModel):
    """One stored object as seen by the dashboard. Identity is ``address``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    address: str = Field(alias="url")
    display_name: str = Field(alias="pathname")
    uploaded_at: datetime = Field(alias="uploadedAt")
    size_bytes: int = Field(alias="size", ge=0)


class FileListResponse(BaseModel):
    """Full snapshot, newest first."""
    files: list[FileRecord]


class UploadResponse(BaseModel):
    success: bool = True
    url: str
    pathname: str


class DeleteRequest(BaseModel):
    url: str = ""


class DeleteResponse(BaseModel):
    success: bool = True
