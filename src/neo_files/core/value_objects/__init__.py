"""neo-files value objects."""

from .file_kind import FileKind, extension_of
from .preview_dimensions import PreviewDimensions, DEFAULT_WIDTH, DEFAULT_HEIGHT
from .preview_key import PreviewKey
from .preview_artifact import (
    PreviewArtifact,
    ArtifactLookup,
    ArtifactState,
    PREVIEW_FOLDER,
    JPEG_EXTENSION,
    PNG_EXTENSION,
)
from .generation_outcome import GenerationOutcome

__all__ = [
    "FileKind",
    "extension_of",
    "PreviewDimensions",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "PreviewKey",
    "PreviewArtifact",
    "ArtifactLookup",
    "ArtifactState",
    "PREVIEW_FOLDER",
    "JPEG_EXTENSION",
    "PNG_EXTENSION",
    "GenerationOutcome",
]
