"""Preview generation exceptions.

A generation failure is permanent for its preview key: the orchestrator
caches a placeholder and never retries it.
"""

from typing import Any, Dict, Optional

from .base import NeoFilesError


class PreviewGenerationFailed(NeoFilesError):
    """Raised when a generator cannot produce a preview."""

    def __init__(
        self,
        message: str,
        file_id: Optional[str] = None,
        generator: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        enhanced_details = details or {}
        if file_id is not None:
            enhanced_details["file_id"] = file_id
        if generator:
            enhanced_details["generator"] = generator

        super().__init__(
            message=message,
            error_code="PREVIEW_GENERATION_FAILED",
            details=enhanced_details,
        )
        self.file_id = file_id
        self.generator = generator


class ExternalPreviewError(PreviewGenerationFailed):
    """Raised when the external rendering service call fails."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        enhanced_details = details or {}
        if status_code is not None:
            enhanced_details["status_code"] = status_code
        super().__init__(message=message, generator="external", details=enhanced_details)
        self.status_code = status_code
