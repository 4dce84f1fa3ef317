"""File not found exception.

Raised when an identifier does not resolve to an entry of the storage drive.
"""

from typing import Any, Dict, Optional

from .base import NeoFilesError


class FileNotFound(NeoFilesError):
    """Raised when a requested file cannot be found."""

    def __init__(
        self,
        message: str,
        file_id: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        enhanced_details = details or {}
        if file_id is not None:
            enhanced_details["file_id"] = file_id

        super().__init__(
            message=message,
            error_code=error_code or "FILE_NOT_FOUND",
            details=enhanced_details,
        )
        self.file_id = file_id
