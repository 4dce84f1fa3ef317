"""API routers, one per concern."""

from .files import router as files_router
from .transfer import router as transfer_router
from .info import router as info_router
from .preview import router as preview_router

__all__ = [
    "files_router",
    "transfer_router",
    "info_router",
    "preview_router",
]
