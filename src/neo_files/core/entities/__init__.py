"""neo-files entities."""

from .file_metadata import FileMetadata

__all__ = ["FileMetadata"]
