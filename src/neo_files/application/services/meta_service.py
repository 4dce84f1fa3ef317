"""File meta information.

Images report their EXIF tags, audio files their title, artist, album, year
and genre tags, folders their total size and entry count. Other kinds have
no meta information.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional

import mutagen
from PIL import ExifTags, Image, UnidentifiedImageError

from ...core.protocols.storage_drive import StorageDrive
from ...core.value_objects.file_kind import FileKind
from .file_service import is_hidden
from .metadata_poller import MetadataPoller

logger = logging.getLogger(__name__)


def read_exif(path: Path) -> Dict[str, Any]:
    """EXIF tags of an image keyed by tag name, empty when there are none."""
    try:
        with Image.open(path) as image:
            exif = image.getexif()
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
        logger.debug(f"Can't read EXIF of {path.name}: {e}")
        return {}

    tags: Dict[str, Any] = {}
    for tag, value in exif.items():
        name = ExifTags.TAGS.get(tag, str(tag))
        if isinstance(value, bytes):
            continue
        tags[name] = value if isinstance(value, (int, float, str)) else str(value)
    return tags


AUDIO_TAGS = ("title", "artist", "album", "genre")


def read_audio_tags(stream: BinaryIO) -> Dict[str, str]:
    """Audio tags of a file; missing tags are empty strings."""
    meta = {"title": "", "artist": "", "album": "", "year": "", "genre": ""}
    try:
        audio = mutagen.File(stream, easy=True)
    except mutagen.MutagenError as e:
        logger.debug(f"Can't read audio tags of {getattr(stream, 'name', 'stream')}: {e}")
        return meta
    if audio is None or audio.tags is None:
        return meta

    for name in AUDIO_TAGS:
        values = audio.tags.get(name)
        if values:
            meta[name] = str(values[0])
    dates = audio.tags.get("date")
    if dates:
        # ID3 and Vorbis dates are ISO 8601, the year comes first
        meta["year"] = str(dates[0])[:4]
    return meta


def folder_summary(path: Path) -> Dict[str, int]:
    """Recursive size in bytes and number of direct entries of a folder.

    Hidden entries, the preview cache included, are not counted.
    """
    size = 0
    for folder, folders, files in os.walk(path):
        folders[:] = [name for name in folders if not is_hidden(name)]
        for name in files:
            if is_hidden(name):
                continue
            try:
                size += os.path.getsize(os.path.join(folder, name))
            except OSError:
                continue
    count = sum(1 for name in os.listdir(path) if not is_hidden(name))
    return {"size": size, "count": count}


class MetaService:
    """Provides the meta information of a drive entry."""

    def __init__(self, drive: StorageDrive, poller: Optional[MetadataPoller] = None):
        self._drive = drive
        self._poller = poller or MetadataPoller(drive)

    async def get_meta(self, file_id: str) -> Optional[Dict[str, Any]]:
        info = await self._poller.resolve(file_id)
        path = self._drive.local_path(info.id)

        if info.kind == FileKind.IMAGE:
            return await asyncio.to_thread(read_exif, path)
        if info.kind == FileKind.AUDIO:
            stream = await self._drive.read(info.id)
            try:
                return await asyncio.to_thread(read_audio_tags, stream)
            finally:
                await asyncio.to_thread(stream.close)
        if info.kind == FileKind.FOLDER:
            return await asyncio.to_thread(folder_summary, path)
        return None
