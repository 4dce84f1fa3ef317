"""Icon resolver.

Maps an extension hint to a static SVG icon. Hints come from file names
and URLs, so both the hint and the size bucket are reduced to
``[A-Za-z0-9.]`` before touching the filesystem.
"""

import re
from pathlib import Path

UNSAFE_CHARACTERS = re.compile(r"[^A-Za-z0-9.]")

DEFAULT_SIZE = "big"
GENERIC_ICON = "file.svg"
UNAVAILABLE_ICON = "unavailable"
FOLDER_ICON = "folder"


def sanitize(value: str) -> str:
    """Strip every character outside [A-Za-z0-9.]."""
    return UNSAFE_CHARACTERS.sub("", value or "")


class IconResolver:
    """Resolves icons under ``<icons_dir>/<size>/<name>.svg``."""

    def __init__(self, icons_dir: str):
        self._root = Path(icons_dir)

    @property
    def root(self) -> Path:
        return self._root

    def resolve_icon(self, extension_hint: str, size: str = DEFAULT_SIZE) -> Path:
        """Get the icon of an extension, or the generic file icon."""
        return self.resolve_asset(sanitize(extension_hint) + ".svg", size)

    def resolve_asset(self, name: str, size: str = DEFAULT_SIZE) -> Path:
        """Get an icon by file name, or the generic file icon. Never fails."""
        bucket = self._bucket(size)
        name = sanitize(name)
        if name and not name.startswith("."):
            candidate = bucket / name
            if candidate.is_file():
                return candidate
        return bucket / GENERIC_ICON

    def _bucket(self, size: str) -> Path:
        size = sanitize(size)
        if size and not size.startswith(".") and (self._root / size).is_dir():
            return self._root / size
        return self._root / DEFAULT_SIZE
