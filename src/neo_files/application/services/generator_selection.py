"""Preview generator selection.

The generator for a cache miss is chosen once per request from the service
configuration and the file kind.
"""

from enum import Enum

from ...core.value_objects.file_kind import FileKind


class GeneratorKind(Enum):
    """Which generator renders a preview."""
    EXTERNAL = "external"
    LOCAL = "local"
    NONE = "none"


def select_generator(service_configured: bool, kind: FileKind) -> GeneratorKind:
    """Pick the preview generator for a file.

    The rendering service handles every kind of file; without it only
    images can be previewed.
    """
    if kind == FileKind.FOLDER:
        return GeneratorKind.NONE
    if service_configured:
        return GeneratorKind.EXTERNAL
    if kind == FileKind.IMAGE:
        return GeneratorKind.LOCAL
    return GeneratorKind.NONE
