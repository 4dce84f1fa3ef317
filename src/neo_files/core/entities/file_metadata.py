"""File metadata entity.

Metadata of a drive entry as reported by the storage drive. It may be
momentarily stale right after a mutation performed elsewhere.
"""

from dataclasses import dataclass
from typing import Any, Dict

from ..value_objects.file_kind import FileKind, extension_of


@dataclass(frozen=True)
class FileMetadata:
    """Drive entry metadata."""

    id: str
    name: str
    size: int
    kind: FileKind
    date: int  # modification time, unix seconds

    @property
    def is_folder(self) -> bool:
        return self.kind == FileKind.FOLDER

    @property
    def extension(self) -> str:
        """Lower-cased extension without the dot, empty for folders."""
        if self.is_folder:
            return ""
        return extension_of(self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "value": self.name,
            "size": self.size,
            "type": self.kind.value,
            "date": self.date,
        }
