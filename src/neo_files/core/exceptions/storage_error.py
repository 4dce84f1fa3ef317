"""Storage drive exceptions."""

from typing import Any, Dict, Optional

from .base import NeoFilesError


class StorageError(NeoFilesError):
    """Raised when the storage drive cannot complete an operation."""

    def __init__(
        self,
        message: str,
        file_id: Optional[str] = None,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        enhanced_details = details or {}
        if file_id is not None:
            enhanced_details["file_id"] = file_id
        if operation:
            enhanced_details["operation"] = operation

        super().__init__(message=message, error_code="STORAGE_ERROR", details=enhanced_details)
        self.file_id = file_id
        self.operation = operation


class AccessDenied(StorageError):
    """Raised when an identifier resolves outside of the storage root."""
    pass
