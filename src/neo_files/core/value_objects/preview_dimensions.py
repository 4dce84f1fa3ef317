"""Preview dimensions value object.

Width and height requested for a thumbnail. Query values are untrusted:
anything that is not a positive integer falls back to the default size.
"""

from dataclasses import dataclass
from typing import Optional


DEFAULT_WIDTH = 214
DEFAULT_HEIGHT = 163


def _parse_dimension(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except (ValueError, AttributeError):
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class PreviewDimensions:
    """Requested thumbnail size in pixels."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    @classmethod
    def parse(
        cls,
        width: Optional[str],
        height: Optional[str],
        default_width: int = DEFAULT_WIDTH,
        default_height: int = DEFAULT_HEIGHT,
    ) -> "PreviewDimensions":
        """Build dimensions from raw query parameters, never failing."""
        return cls(
            width=_parse_dimension(width, default_width),
            height=_parse_dimension(height, default_height),
        )

    def exceeds(self, limit: int) -> bool:
        """Check if either axis is larger than the given limit."""
        return self.width > limit or self.height > limit

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"
