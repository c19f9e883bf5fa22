"""Test fixtures — temp-dir object store, FastAPI test client, record factory."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from phonedrop.main import create_app
from phonedrop.models.base import Base
from phonedrop.schemas.files import FileRecord
from phonedrop.services import get_object_store, get_upload_service
from phonedrop.services.object_store import LocalObjectStore
from phonedrop.services.upload_service import UploadService

BASE_URL = "http://test"


@pytest_asyncio.fixture
async def store(tmp_path):
    """LocalObjectStore over a throwaway SQLite file and blob directory."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'index.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield LocalObjectStore(session_factory, tmp_path / "blobs", BASE_URL)

    await engine.dispose()


@pytest.fixture
def upload_service(store):
    return UploadService(store)


@pytest.fixture
def app(store, upload_service):
    """App with the service registry replaced by test instances."""
    app = create_app()
    app.dependency_overrides[get_object_store] = lambda: store
    app.dependency_overrides[get_upload_service] = lambda: upload_service
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE_URL) as c:
        yield c


@pytest.fixture
def make_record():
    """Build FileRecords with uploaded_at relative to a fixed instant."""
    now = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)

    def _make(name: str, age_s: int = 0, size: int = 10) -> FileRecord:
        return FileRecord(
            address=f"{BASE_URL}/blobs/{name}",
            display_name=name,
            uploaded_at=now - timedelta(seconds=age_s),
            size_bytes=size,
        )

    return _make
