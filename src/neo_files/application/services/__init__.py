"""Application services: file operations, meta information and previews."""

from .metadata_poller import MetadataPoller
from .icon_resolver import IconResolver, sanitize
from .generator_selection import GeneratorKind, select_generator
from .single_flight import SingleFlight
from .preview_service import PreviewService, PreviewResult
from .file_service import FileService, OperationResult
from .meta_service import MetaService

__all__ = [
    "MetadataPoller",
    "IconResolver",
    "sanitize",
    "GeneratorKind",
    "select_generator",
    "SingleFlight",
    "PreviewService",
    "PreviewResult",
    "FileService",
    "OperationResult",
    "MetaService",
]
