"""Preview generators."""

from .local_thumbnail import LocalThumbnailGenerator
from .external_preview import ExternalPreviewProxy, extension_for_content_type
from .multipart_pipe import MultipartPipe

__all__ = [
    "LocalThumbnailGenerator",
    "ExternalPreviewProxy",
    "extension_for_content_type",
    "MultipartPipe",
]
