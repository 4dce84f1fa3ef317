"""File kind value object.

Categorizes drive entries by extension. The kind drives preview generator
selection and the meta endpoint.
"""

from enum import Enum
from pathlib import PurePosixPath


IMAGE_EXTENSIONS = frozenset({
    "jpg", "jpeg", "png", "gif", "bmp", "webp", "tif", "tiff", "ico", "svg", "heic",
})

VIDEO_EXTENSIONS = frozenset({
    "mp4", "webm", "mkv", "mov", "avi", "m4v", "mpg", "mpeg", "ogv", "flv", "3gp",
})

AUDIO_EXTENSIONS = frozenset({
    "mp3", "wav", "ogg", "flac", "aac", "m4a", "wma", "opus",
})

DOCUMENT_EXTENSIONS = frozenset({
    "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "odt", "ods", "odp",
    "rtf", "txt", "md", "csv",
})

CODE_EXTENSIONS = frozenset({
    "py", "js", "ts", "jsx", "tsx", "go", "java", "c", "h", "cpp", "hpp", "cs",
    "rb", "php", "rs", "swift", "kt", "sh", "sql", "html", "css", "scss",
    "json", "xml", "yml", "yaml", "toml", "ini",
})

ARCHIVE_EXTENSIONS = frozenset({
    "zip", "rar", "7z", "tar", "gz", "bz2", "xz", "tgz",
})


class FileKind(str, Enum):
    """Kind of a drive entry."""
    FOLDER = "folder"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"
    CODE = "code"
    ARCHIVE = "archive"
    FILE = "file"

    @classmethod
    def from_name(cls, name: str) -> "FileKind":
        """Detect the kind of a file from its name."""
        ext = extension_of(name)
        if ext in IMAGE_EXTENSIONS:
            return cls.IMAGE
        if ext in VIDEO_EXTENSIONS:
            return cls.VIDEO
        if ext in AUDIO_EXTENSIONS:
            return cls.AUDIO
        if ext in DOCUMENT_EXTENSIONS:
            return cls.DOCUMENT
        if ext in CODE_EXTENSIONS:
            return cls.CODE
        if ext in ARCHIVE_EXTENSIONS:
            return cls.ARCHIVE
        return cls.FILE


def extension_of(name: str) -> str:
    """Get the lower-cased extension of a name, without the dot."""
    return PurePosixPath(name).suffix[1:].lower()
