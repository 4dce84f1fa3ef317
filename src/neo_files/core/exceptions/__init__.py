"""neo-files core exceptions."""

from .base import NeoFilesError, ConfigurationError, InvalidOperation
from .file_not_found import FileNotFound
from .storage_error import StorageError, AccessDenied
from .preview_generation_failed import PreviewGenerationFailed, ExternalPreviewError

__all__ = [
    "NeoFilesError",
    "ConfigurationError",
    "InvalidOperation",
    "FileNotFound",
    "StorageError",
    "AccessDenied",
    "PreviewGenerationFailed",
    "ExternalPreviewError",
]
