"""Local filesystem storage drive.

Implements the StorageDrive protocol on top of a directory tree. Blocking
filesystem calls run in worker threads so they never stall the event loop.
"""

import asyncio
import logging
import os
import shutil
from pathlib import Path, PurePosixPath
from typing import BinaryIO, List, Optional, Tuple

from ...core.entities.file_metadata import FileMetadata
from ...core.exceptions import AccessDenied, FileNotFound, StorageError
from ...core.protocols.storage_drive import ListConfig
from ...core.value_objects.file_kind import FileKind

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 64 * 1024


class LocalDrive:
    """Storage drive rooted at a local directory."""

    def __init__(self, root: str, verbose: bool = False):
        self._root = Path(root).resolve()
        self._verbose = verbose
        if not self._root.is_dir():
            raise StorageError(f"Storage root is not a folder: {root}", operation="init")

    @property
    def root(self) -> Path:
        return self._root

    # Identifier handling

    def local_path(self, file_id: str) -> Path:
        """Resolve an identifier to a path inside the root.

        Raises:
            AccessDenied: If the identifier escapes the root or is not a valid path
        """
        if "\x00" in (file_id or ""):
            raise AccessDenied("Access denied", file_id=file_id)
        relative = PurePosixPath((file_id or "").replace("\\", "/").lstrip("/"))
        try:
            path = (self._root / relative).resolve()
        except (OSError, RuntimeError, ValueError) as e:
            # symlink loops, overlong names
            raise AccessDenied("Access denied", file_id=file_id) from e
        if path != self._root and self._root not in path.parents:
            raise AccessDenied("Access denied", file_id=file_id)
        return path

    def _to_id(self, path: Path) -> str:
        relative = path.relative_to(self._root).as_posix()
        return "/" if relative == "." else "/" + relative

    def _metadata(self, path: Path) -> FileMetadata:
        try:
            stat = path.stat()
        except OSError as e:
            raise FileNotFound(f"File not found: {self._to_id(path)}", file_id=self._to_id(path)) from e

        is_dir = path.is_dir()
        return FileMetadata(
            id=self._to_id(path),
            name=path.name if path != self._root else "",
            size=0 if is_dir else stat.st_size,
            kind=FileKind.FOLDER if is_dir else FileKind.from_name(path.name),
            date=int(stat.st_mtime),
        )

    def _log(self, operation: str, file_id: str) -> None:
        if self._verbose:
            logger.debug(f"{operation} {file_id}")

    # Read operations

    async def info(self, file_id: str) -> FileMetadata:
        self._log("info", file_id)
        path = self.local_path(file_id)
        return await asyncio.to_thread(self._metadata, path)

    async def exists(self, file_id: str) -> bool:
        try:
            path = self.local_path(file_id)
        except AccessDenied:
            return False
        return await asyncio.to_thread(path.exists)

    async def read(self, file_id: str) -> BinaryIO:
        self._log("read", file_id)
        path = self.local_path(file_id)
        try:
            return await asyncio.to_thread(path.open, "rb")
        except FileNotFoundError as e:
            raise FileNotFound(f"File not found: {file_id}", file_id=file_id) from e
        except OSError as e:
            raise StorageError(str(e), file_id=file_id, operation="read") from e

    async def list(self, file_id: str, config: Optional[ListConfig] = None) -> List[FileMetadata]:
        self._log("list", file_id)
        path = self.local_path(file_id)
        if not path.is_dir():
            raise FileNotFound(f"Folder not found: {file_id}", file_id=file_id)
        return await asyncio.to_thread(self._list, path, config or ListConfig())

    def _list(self, folder: Path, config: ListConfig) -> List[FileMetadata]:
        result: List[FileMetadata] = []
        try:
            entries = sorted(os.scandir(folder), key=lambda e: (not e.is_dir(), e.name.lower()))
        except OSError as e:
            raise StorageError(str(e), file_id=self._to_id(folder), operation="list") from e

        for entry in entries:
            if config.exclude and config.exclude(entry.name):
                continue
            path = Path(entry.path)
            if config.include is None or config.include(entry.name):
                result.append(self._metadata(path))
            if config.sub_folders and entry.is_dir():
                result.extend(self._list(path, config))
        return result

    async def stats(self) -> Tuple[int, int]:
        usage = await asyncio.to_thread(shutil.disk_usage, self._root)
        return usage.used, usage.free

    # Write operations

    async def make(self, parent_id: str, name: str, is_folder: bool) -> str:
        self._log("make", f"{parent_id}/{name}")
        target = self._child(parent_id, name)
        try:
            if is_folder:
                await asyncio.to_thread(target.mkdir)
            else:
                await asyncio.to_thread(target.touch, exist_ok=False)
        except FileExistsError as e:
            raise StorageError(f"Already exists: {name}", file_id=self._to_id(target), operation="make") from e
        except OSError as e:
            raise StorageError(str(e), file_id=self._to_id(target), operation="make") from e
        return self._to_id(target)

    async def write(self, file_id: str, content: BinaryIO) -> None:
        self._log("write", file_id)
        path = self.local_path(file_id)
        if path.is_dir():
            raise StorageError("Can't write into a folder", file_id=file_id, operation="write")
        await asyncio.to_thread(self._write, path, content)

    @staticmethod
    def _write(path: Path, content: BinaryIO) -> None:
        with path.open("wb") as target:
            shutil.copyfileobj(content, target, COPY_CHUNK_SIZE)

    async def move(self, file_id: str, target_id: str, name: str = "") -> str:
        self._log("move", file_id)
        source = self._existing(file_id)
        destination = self._destination(source, target_id, name)
        if destination == source:
            return self._to_id(source)
        if destination.exists():
            raise StorageError("Target already exists", file_id=self._to_id(destination), operation="move")
        if source in destination.parents:
            raise StorageError("Can't move a folder into itself", file_id=file_id, operation="move")
        await asyncio.to_thread(shutil.move, str(source), str(destination))
        return self._to_id(destination)

    async def copy(self, file_id: str, target_id: str, name: str = "") -> str:
        self._log("copy", file_id)
        source = self._existing(file_id)
        destination = self._destination(source, target_id, name)
        if destination.exists():
            raise StorageError("Target already exists", file_id=self._to_id(destination), operation="copy")
        if source in destination.parents:
            raise StorageError("Can't copy a folder into itself", file_id=file_id, operation="copy")
        if source.is_dir():
            await asyncio.to_thread(shutil.copytree, source, destination)
        else:
            await asyncio.to_thread(shutil.copy2, source, destination)
        return self._to_id(destination)

    async def remove(self, file_id: str) -> None:
        self._log("remove", file_id)
        path = self._existing(file_id)
        if path == self._root:
            raise StorageError("Can't remove the root folder", file_id=file_id, operation="remove")
        if path.is_dir():
            await asyncio.to_thread(shutil.rmtree, path)
        else:
            await asyncio.to_thread(path.unlink)

    # Helpers

    def _existing(self, file_id: str) -> Path:
        path = self.local_path(file_id)
        if not path.exists():
            raise FileNotFound(f"File not found: {file_id}", file_id=file_id)
        return path

    def _child(self, parent_id: str, name: str) -> Path:
        if not name or name in (".", "..") or "/" in name or "\\" in name:
            raise StorageError(f"Invalid name: {name}", operation="make")
        parent = self._existing(parent_id)
        if not parent.is_dir():
            raise StorageError("Parent is not a folder", file_id=parent_id, operation="make")
        return parent / name

    def _destination(self, source: Path, target_id: str, name: str) -> Path:
        folder = self._existing(target_id) if target_id else source.parent
        if not folder.is_dir():
            raise StorageError("Target is not a folder", file_id=target_id)
        new_name = name or source.name
        if new_name in (".", "..") or "/" in new_name or "\\" in new_name:
            raise StorageError(f"Invalid name: {new_name}")
        return folder / new_name
