"""Base exceptions for neo-files.

All exceptions inherit from NeoFilesError and carry an error code and
structured details for logging and API responses.
"""

from typing import Any, Dict, Optional


class NeoFilesError(Exception):
    """Base exception for all neo-files errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a serializable dictionary."""
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
            "type": self.__class__.__name__,
        }


class ConfigurationError(NeoFilesError):
    """Raised when the service configuration is invalid."""
    pass


class InvalidOperation(NeoFilesError):
    """Raised when a request is missing parameters or names an unknown operation."""
    pass
