"""Tests for the file manager operations."""

import io
import re

import pytest

from neo_files.application.services import FileService
from neo_files.core.exceptions import InvalidOperation


@pytest.fixture
def service(drive):
    return FileService(drive)


class TestListing:
    """Test listing and search results."""

    @pytest.mark.asyncio
    async def test_root_listing(self, service):
        entries = await service.list_files("/")

        assert [e["value"] for e in entries] == ["docs", "empty", "photos"]
        docs = entries[0]
        assert docs["id"] == "/docs"
        assert docs["type"] == "folder"
        assert docs["count"] == 2
        assert docs["lazy"] is True
        assert "size" not in docs
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", docs["date"])

    @pytest.mark.asyncio
    async def test_empty_folder_is_not_lazy(self, service):
        entries = await service.list_files("/")
        empty = next(e for e in entries if e["value"] == "empty")
        assert "count" not in empty
        assert "lazy" not in empty

    @pytest.mark.asyncio
    async def test_files_report_generic_type(self, service):
        entries = await service.list_files("/photos")
        assert [e["type"] for e in entries] == ["file", "file"]
        assert all(e["size"] > 0 for e in entries)

    @pytest.mark.asyncio
    async def test_preview_cache_is_hidden(self, service, storage_root):
        (storage_root / "photos" / ".preview").mkdir()
        entries = await service.list_files("/photos")
        assert [e["value"] for e in entries] == ["a.jpg", "b.png"]

    @pytest.mark.asyncio
    async def test_search(self, service):
        entries = await service.list_files("/", "READ")
        assert [e["id"] for e in entries] == ["/docs/readme.txt"]

    @pytest.mark.asyncio
    async def test_search_matches_folders(self, service):
        entries = await service.list_files("/", "phot")
        assert [e["id"] for e in entries] == ["/photos"]


class TestOperations:
    """Test CRUD operations and their validation."""

    @pytest.mark.asyncio
    async def test_rename(self, service):
        result = await service.rename("/docs/readme.txt", "rename", "notes.txt")
        assert result.to_dict() == {"id": "/docs/notes.txt", "name": "notes.txt"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation, name", [("", "x.txt"), ("delete", "x.txt"), ("rename", "")])
    async def test_rename_validation(self, service, operation, name):
        with pytest.raises(InvalidOperation):
            await service.rename("/docs/readme.txt", operation, name)

    @pytest.mark.asyncio
    async def test_create(self, service, storage_root):
        folder = await service.create("/", "new", "folder")
        file = await service.create("/new", "a.txt", "file")

        assert folder.id == "/new"
        assert file.id == "/new/a.txt"
        assert (storage_root / "new" / "a.txt").is_file()

    @pytest.mark.asyncio
    async def test_create_validation(self, service):
        with pytest.raises(InvalidOperation):
            await service.create("/", "", "file")

    @pytest.mark.asyncio
    async def test_copy_batch(self, service, storage_root):
        results = await service.transfer("copy", ["/photos/a.jpg", "/docs/readme.txt"], "/empty")

        assert [r.id for r in results] == ["/empty/a.jpg", "/empty/readme.txt"]
        assert (storage_root / "photos" / "a.jpg").exists()

    @pytest.mark.asyncio
    async def test_move_batch(self, service, storage_root):
        results = await service.transfer("move", ["/photos/a.jpg"], "/empty")

        assert [r.to_dict() for r in results] == [{"id": "/empty/a.jpg", "name": "a.jpg"}]
        assert not (storage_root / "photos" / "a.jpg").exists()

    @pytest.mark.asyncio
    async def test_transfer_validation(self, service):
        with pytest.raises(InvalidOperation):
            await service.transfer("copy", None, "/empty")
        with pytest.raises(InvalidOperation):
            await service.transfer("rename", ["/photos/a.jpg"], "/empty")

    @pytest.mark.asyncio
    async def test_remove(self, service, storage_root):
        await service.remove(["/photos/a.jpg", "/docs"])
        assert not (storage_root / "photos" / "a.jpg").exists()
        assert not (storage_root / "docs").exists()

    @pytest.mark.asyncio
    async def test_remove_without_ids(self, service):
        with pytest.raises(InvalidOperation):
            await service.remove(None)

    @pytest.mark.asyncio
    async def test_upload_creates_sub_folders(self, service, storage_root):
        result = await service.upload("/empty", "2024/june/report.txt", io.BytesIO(b"report"))

        assert result.id == "/empty/2024/june/report.txt"
        assert (storage_root / "empty" / "2024" / "june" / "report.txt").read_bytes() == b"report"

    @pytest.mark.asyncio
    async def test_upload_into_existing_folder(self, service, storage_root):
        result = await service.upload("/", "docs/new.txt", io.BytesIO(b"new"))
        assert result.id == "/docs/new.txt"

    @pytest.mark.asyncio
    async def test_upload_without_name(self, service):
        with pytest.raises(InvalidOperation):
            await service.upload("/", "", io.BytesIO(b""))

    @pytest.mark.asyncio
    async def test_open(self, service):
        info, stream = await service.open("/docs/readme.txt")
        try:
            assert info.name == "readme.txt"
            assert stream.read() == b"hello neo-files\n"
        finally:
            stream.close()

    @pytest.mark.asyncio
    async def test_stats(self, service):
        stats = await service.stats()
        assert stats["total"] == stats["used"] + stats["free"]
