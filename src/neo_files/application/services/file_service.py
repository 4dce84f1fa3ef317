"""File manager operations.

Thin layer over the storage drive: validates request parameters, forwards
the call and shapes the result for the file manager client.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, BinaryIO, Dict, List, Optional, Tuple

from ...core.entities.file_metadata import FileMetadata
from ...core.exceptions import InvalidOperation
from ...core.protocols.storage_drive import ListConfig, StorageDrive
from ...core.value_objects.file_kind import FileKind

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def is_hidden(name: str) -> bool:
    """Dot entries (including the ``.preview`` cache) are never listed."""
    return name.startswith(".")


def get_list_config(search: str = "") -> ListConfig:
    """Listing options: a folder's direct entries, or a recursive name search."""
    if not search:
        return ListConfig(sub_folders=False, exclude=is_hidden)

    needle = search.lower()
    return ListConfig(
        sub_folders=True,
        include=lambda name: needle in name.lower(),
        exclude=is_hidden,
    )


@dataclass(frozen=True)
class OperationResult:
    """Identifier and name of an entry touched by an operation."""

    id: str
    name: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name}


class FileService:
    """File listing and CRUD operations."""

    SUPPORTED_BATCH_OPERATIONS = ("move", "copy")

    def __init__(self, drive: StorageDrive):
        self._drive = drive

    # Listing

    async def list_files(self, folder_id: str = "/", search: str = "") -> List[Dict[str, Any]]:
        """List a folder (or search below it) in the client's entry format."""
        entries = await self._drive.list(folder_id, get_list_config(search))
        return [await self._normalize(entry) for entry in entries]

    async def _normalize(self, entry: FileMetadata) -> Dict[str, Any]:
        item: Dict[str, Any] = {
            "id": entry.id,
            "value": entry.name,
            "date": datetime.fromtimestamp(entry.date, tz=timezone.utc).strftime(DATE_FORMAT),
        }

        if entry.kind == FileKind.FOLDER:
            item["type"] = FileKind.FOLDER.value
            children = await self._drive.list(entry.id, get_list_config())
            if children:
                item["count"] = len(children)
                item["lazy"] = True
        else:
            item["type"] = FileKind.FILE.value
            item["size"] = entry.size
        return item

    # Single entry operations

    async def rename(self, file_id: str, operation: str, name: str) -> OperationResult:
        if not operation:
            raise InvalidOperation("'operation' parameter must be provided")
        if operation != "rename":
            raise InvalidOperation("operation is not supported")
        if not name:
            raise InvalidOperation("'name' parameter must be provided")

        new_id = await self._drive.move(file_id, "", name)
        return await self._result(new_id)

    async def create(self, parent_id: str, name: str, kind: str) -> OperationResult:
        if not name or not kind:
            raise InvalidOperation("'type' and 'name' parameters must be provided")

        new_id = await self._drive.make(parent_id, name, kind == FileKind.FOLDER.value)
        logger.info(f"Created {kind} {new_id}")
        return await self._result(new_id)

    # Batch operations

    async def transfer(self, operation: str, ids: Optional[List[str]], target: str) -> List[OperationResult]:
        """Move or copy several entries into ``target``."""
        if not operation or ids is None or not target:
            raise InvalidOperation("'operation', 'target' and 'ids' parameters must be provided")
        if operation not in self.SUPPORTED_BATCH_OPERATIONS:
            raise InvalidOperation("operation is not supported")

        action = self._drive.move if operation == "move" else self._drive.copy
        results = []
        for file_id in ids:
            new_id = await action(file_id, target, "")
            results.append(await self._result(new_id))
        return results

    async def remove(self, ids: Optional[List[str]]) -> None:
        if ids is None:
            raise InvalidOperation("IDs are not provided")
        for file_id in ids:
            await self._drive.remove(file_id)
            logger.info(f"Removed {file_id}")

    # Transfer of content

    async def open(self, file_id: str) -> Tuple[FileMetadata, BinaryIO]:
        """Get an entry's metadata and an open stream of its content."""
        if not file_id:
            raise InvalidOperation("id not provided")
        info = await self._drive.info(file_id)
        stream = await self._drive.read(file_id)
        return info, stream

    async def upload(self, base_id: str, filename: str, content: BinaryIO) -> OperationResult:
        """Store an uploaded file, creating the sub-folders named in ``filename``."""
        parts = [part for part in filename.split("/") if part]
        if not parts:
            raise InvalidOperation("The file has not been uploaded")

        base = base_id or "/"
        for folder in parts[:-1]:
            candidate = base.rstrip("/") + "/" + folder
            if await self._drive.exists(candidate):
                base = candidate
            else:
                base = await self._drive.make(base, folder, True)

        file_id = await self._drive.make(base, parts[-1], False)
        await self._drive.write(file_id, content)
        logger.info(f"Uploaded {file_id}")
        return await self._result(file_id)

    async def stats(self) -> Dict[str, int]:
        used, free = await self._drive.stats()
        return {"used": used, "free": free, "total": used + free}

    async def _result(self, file_id: str) -> OperationResult:
        info = await self._drive.info(file_id)
        return OperationResult(id=info.id, name=info.name)
