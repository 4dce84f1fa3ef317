"""neo-files application factory.

Builds the FastAPI application: the lifespan wires the storage drive, the
shared HTTP client and the services onto ``app.state``; routers resolve them
through the dependencies in ``api.dependencies``.
"""

import logging
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .__version__ import __version__
from .api.exception_handlers import register_exception_handlers
from .api.routers import files_router, info_router, preview_router, transfer_router
from .application.services import FileService, IconResolver, MetaService, MetadataPoller, PreviewService
from .config.settings import FileManagerSettings, get_settings
from .infrastructure.generators import ExternalPreviewProxy, LocalThumbnailGenerator
from .infrastructure.middleware import TimingMiddleware
from .infrastructure.storage import LocalDrive

logger = logging.getLogger(__name__)


def load_environment(project_root: Path) -> None:
    """Load ``.env`` then ``.env.local`` overrides when present."""
    env_file = project_root / ".env"
    if env_file.exists():
        load_dotenv(env_file)
        logger.info(f"Loaded environment variables from {env_file}")

    env_local_file = project_root / ".env.local"
    if env_local_file.exists():
        load_dotenv(env_local_file, override=True)
        logger.info(f"Loaded local environment overrides from {env_local_file}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the drive, the HTTP client and the services for the app's lifetime."""
    settings: FileManagerSettings = app.state.settings
    preview_config = settings.get_preview_config()

    temp_root = None
    root = settings.root
    if not root:
        temp_root = tempfile.TemporaryDirectory(prefix="neo-files-")
        root = temp_root.name
        logger.warning(f"No storage root configured, serving temporary folder {root}")

    drive = LocalDrive(root, verbose=not settings.is_production)
    client = httpx.AsyncClient(timeout=preview_config.remote_timeout)
    poller = MetadataPoller(drive, preview_config.poll_interval, preview_config.poll_deadline)
    icons = IconResolver(settings.icons_dir)

    remote_proxy = None
    if preview_config.remote_enabled:
        remote_proxy = ExternalPreviewProxy(
            client,
            preview_config.service_url,
            timeout=preview_config.remote_timeout,
            pipe_depth=preview_config.pipe_depth,
        )

    app.state.drive = drive
    app.state.http_client = client
    app.state.icons = icons
    app.state.file_service = FileService(drive)
    app.state.meta_service = MetaService(drive, poller)
    app.state.preview_service = PreviewService(
        drive,
        preview_config,
        icons,
        local_generator=LocalThumbnailGenerator(),
        remote_proxy=remote_proxy,
        poller=poller,
    )

    logger.info(f"Serving {drive.root} with config {settings.get_service_specific_config()}")
    try:
        yield
    finally:
        await client.aclose()
        if temp_root is not None:
            temp_root.cleanup()


def create_app(settings: Optional[FileManagerSettings] = None) -> FastAPI:
    """Create the file manager API.

    Args:
        settings: Settings to use, the cached environment settings by default

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="neo-files",
        version=__version__,
        description="File manager backend with a preview cache",
        lifespan=lifespan,
    )
    app.state.settings = settings

    if settings.server.cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.server.cors,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_middleware(TimingMiddleware)

    register_exception_handlers(app, is_production=settings.is_production)

    app.include_router(files_router)
    app.include_router(transfer_router)
    app.include_router(info_router)
    app.include_router(preview_router)

    return app
