"""Preview key value object.

Identifies one cache entry: the same file requested at the same size.
"""

from dataclasses import dataclass

from .preview_dimensions import PreviewDimensions


@dataclass(frozen=True)
class PreviewKey:
    """(file identifier, width, height) tuple identifying a cache entry."""

    file_id: str
    dimensions: PreviewDimensions

    @property
    def width(self) -> int:
        return self.dimensions.width

    @property
    def height(self) -> int:
        return self.dimensions.height

    def __str__(self) -> str:
        return f"{self.file_id}@{self.dimensions}"
