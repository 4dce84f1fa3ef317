"""Storage drive protocol.

Contract of the storage abstraction the file manager and the preview engine
delegate to. Identifiers are ``/``-separated paths relative to the drive root.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, List, Optional, Tuple
from typing_extensions import Protocol, runtime_checkable

from ..entities.file_metadata import FileMetadata


NamePredicate = Callable[[str], bool]


@dataclass
class ListConfig:
    """Listing options.

    ``include`` selects entries to report, ``exclude`` hides entries and,
    for folders, prunes their subtree.
    """

    sub_folders: bool = False
    include: Optional[NamePredicate] = None
    exclude: Optional[NamePredicate] = None


@runtime_checkable
class StorageDrive(Protocol):
    """Storage drive protocol."""

    async def info(self, file_id: str) -> FileMetadata:
        """Get metadata of an entry.

        Raises:
            FileNotFound: If the entry does not exist
        """
        ...

    async def read(self, file_id: str) -> BinaryIO:
        """Open an entry for reading. The caller closes the stream."""
        ...

    async def list(self, file_id: str, config: Optional[ListConfig] = None) -> List[FileMetadata]:
        """List the entries of a folder."""
        ...

    async def exists(self, file_id: str) -> bool:
        ...

    async def make(self, parent_id: str, name: str, is_folder: bool) -> str:
        """Create an empty file or a folder and return its identifier."""
        ...

    async def write(self, file_id: str, content: BinaryIO) -> None:
        """Replace the content of a file."""
        ...

    async def move(self, file_id: str, target_id: str, name: str = "") -> str:
        """Move an entry into a folder and/or rename it, returning the new identifier."""
        ...

    async def copy(self, file_id: str, target_id: str, name: str = "") -> str:
        """Copy an entry into a folder, returning the identifier of the copy."""
        ...

    async def remove(self, file_id: str) -> None:
        ...

    async def stats(self) -> Tuple[int, int]:
        """Get (used, free) bytes of the underlying volume."""
        ...

    def local_path(self, file_id: str) -> Path:
        """Resolve an identifier to its path on the local filesystem."""
        ...
