"""Tests for the local object store."""

import pytest

from phonedrop.errors import BlobNotFound, UploadFailed


@pytest.mark.asyncio
async def test_put_then_list(store):
    result = await store.put("1-a.txt", b"hello", content_type="text/plain")
    assert result.address == "http://test/blobs/1-a.txt"
    assert result.pathname == "1-a.txt"

    blobs = await store.list()
    assert len(blobs) == 1
    assert blobs[0].size_bytes == 5
    assert blobs[0].uploaded_at.tzinfo is not None


@pytest.mark.asyncio
async def test_list_newest_first(store):
    await store.put("1-old.txt", b"1")
    await store.put("2-new.txt", b"2")
    assert [b.pathname for b in await store.list()] == ["2-new.txt", "1-old.txt"]


@pytest.mark.asyncio
async def test_objects_are_immutable(store):
    await store.put("1-a.txt", b"first")
    with pytest.raises(UploadFailed):
        await store.put("1-a.txt", b"second")
    _, path = await store.read("1-a.txt")
    assert path.read_bytes() == b"first"


@pytest.mark.asyncio
async def test_address_is_url_quoted(store):
    result = await store.put("1-my notes.md", b"x")
    assert result.address.endswith("/blobs/1-my%20notes.md")


@pytest.mark.asyncio
async def test_delete_by_address(store):
    result = await store.put("1-a.txt", b"x")
    _, path = await store.read("1-a.txt")

    await store.delete(result.address)

    assert await store.list() == []
    assert not path.exists()
    with pytest.raises(BlobNotFound):
        await store.read("1-a.txt")


@pytest.mark.asyncio
async def test_delete_unknown(store):
    with pytest.raises(BlobNotFound):
        await store.delete("http://test/blobs/nope")


@pytest.mark.asyncio
async def test_private_blob_not_readable(store):
    await store.put("1-secret.txt", b"x", public_read=False)
    with pytest.raises(BlobNotFound):
        await store.read("1-secret.txt")


@pytest.mark.asyncio
async def test_path_traversal_rejected(store):
    with pytest.raises(UploadFailed):
        await store.put("../escape.txt", b"x")
    with pytest.raises(BlobNotFound):
        await store.read("../index.db")


@pytest.mark.asyncio
async def test_unwritable_name_is_upload_failed(store):
    # Longer than one path component allows, so write and cleanup both fail
    with pytest.raises(UploadFailed):
        await store.put("x" * 300 + ".txt", b"x")
    assert await store.list() == []
