"""Tests for the metadata poller."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from neo_files.application.services import MetadataPoller
from neo_files.core.entities import FileMetadata
from neo_files.core.exceptions import AccessDenied, FileNotFound
from neo_files.core.value_objects import FileKind

INFO = FileMetadata(id="/a.jpg", name="a.jpg", size=10, kind=FileKind.IMAGE, date=0)


class TestMetadataPoller:
    """Test bounded polling of drive metadata."""

    @pytest.mark.asyncio
    async def test_immediate_success(self):
        drive = AsyncMock()
        drive.info.return_value = INFO
        poller = MetadataPoller(drive, interval=0.01, deadline=1.0)

        assert await poller.resolve("/a.jpg") == INFO
        drive.info.assert_awaited_once_with("/a.jpg")

    @pytest.mark.asyncio
    async def test_retries_until_visible(self):
        """An entry that shows up late is still resolved."""
        drive = AsyncMock()
        drive.info.side_effect = [FileNotFound("nope"), FileNotFound("nope"), INFO]
        poller = MetadataPoller(drive, interval=0.01, deadline=1.0)

        assert await poller.resolve("/a.jpg") == INFO
        assert drive.info.await_count == 3

    @pytest.mark.asyncio
    async def test_deadline_raises_last_failure(self):
        drive = AsyncMock()
        drive.info.side_effect = FileNotFound("missing")
        poller = MetadataPoller(drive, interval=0.01, deadline=0.05)

        with pytest.raises(FileNotFound):
            await poller.resolve("/missing.jpg")
        assert drive.info.await_count >= 2

    @pytest.mark.asyncio
    async def test_access_denied_is_not_retried(self):
        drive = AsyncMock()
        drive.info.side_effect = AccessDenied("Access denied")
        poller = MetadataPoller(drive, interval=0.01, deadline=1.0)

        with pytest.raises(AccessDenied):
            await poller.resolve("/../etc/passwd")
        drive.info.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cancellation_stops_polling(self):
        drive = AsyncMock()
        drive.info.side_effect = FileNotFound("missing")
        poller = MetadataPoller(drive, interval=0.01, deadline=10.0)

        task = asyncio.create_task(poller.resolve("/missing.jpg"))
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        calls = drive.info.await_count
        await asyncio.sleep(0.05)
        assert drive.info.await_count == calls
