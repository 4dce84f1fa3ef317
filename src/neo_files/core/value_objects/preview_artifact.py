"""Preview artifact value object.

Locates the cached thumbnail of a preview key on disk and reports its state.

Layout: ``<source-parent>/.preview/<source-basename>___<width>x<height>.<ext>``
A zero-byte ``.jpg`` marks a generation that failed for good.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .preview_dimensions import PreviewDimensions


PREVIEW_FOLDER = ".preview"
JPEG_EXTENSION = ".jpg"
PNG_EXTENSION = ".png"

# Probe order for an existing artifact
ARTIFACT_EXTENSIONS = (JPEG_EXTENSION, PNG_EXTENSION)


class ArtifactState(Enum):
    """State of a cache entry."""
    READY = "ready"
    UNAVAILABLE = "unavailable"
    MISSING = "missing"


@dataclass(frozen=True)
class PreviewArtifact:
    """Cache entry location for one source file and size."""

    folder: Path
    base: Path

    @classmethod
    def for_source(cls, source: Path, dimensions: PreviewDimensions) -> "PreviewArtifact":
        folder = source.parent / PREVIEW_FOLDER
        base = folder / f"{source.name}___{dimensions.width}x{dimensions.height}"
        return cls(folder=folder, base=base)

    def path_for(self, extension: str) -> Path:
        """Full artifact path for the given extension (with the dot)."""
        return self.base.with_name(self.base.name + extension)

    @property
    def placeholder_path(self) -> Path:
        return self.path_for(JPEG_EXTENSION)

    def probe(self) -> "ArtifactLookup":
        """Check for a previously generated artifact or placeholder."""
        for extension in ARTIFACT_EXTENSIONS:
            path = self.path_for(extension)
            try:
                size = path.stat().st_size
            except OSError:
                continue
            if size == 0:
                return ArtifactLookup(ArtifactState.UNAVAILABLE, path)
            return ArtifactLookup(ArtifactState.READY, path)
        return ArtifactLookup(ArtifactState.MISSING, None)

    def ensure_folder(self) -> None:
        self.folder.mkdir(parents=True, exist_ok=True)

    def mark_unavailable(self) -> Path:
        """Write the zero-byte placeholder and return its path."""
        path = self.placeholder_path
        path.write_bytes(b"")
        return path


@dataclass(frozen=True)
class ArtifactLookup:
    """Result of probing the cache."""

    state: ArtifactState
    path: Optional[Path]
