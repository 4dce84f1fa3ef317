"""neo-files - file manager backend with a preview cache.

Provides:
- File listing, search and CRUD over a storage drive
- Thumbnail previews cached next to their sources
- Local (Pillow) and remote (streamed multipart) preview generation
- Static icon fallbacks
"""

from .__version__ import __version__

__all__ = ["__version__"]
