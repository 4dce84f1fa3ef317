"""Generation outcome value object."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class GenerationOutcome:
    """A successfully written preview artifact."""

    extension: str
    path: Path

    @property
    def media_type(self) -> str:
        return "image/png" if self.extension == ".png" else "image/jpeg"
