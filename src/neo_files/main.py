"""neo-files entry point.

    neo-files [--preview URL|none] [--limit BYTES] [--port PORT] [ROOT]

Command line options override the ``APP_*`` environment settings.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import click
import uvicorn

from .app import create_app, load_environment
from .config.logging_config import LoggingConfig
from .config.settings import FileManagerSettings

logger = LoggingConfig.get_logger(__name__)


def apply_overrides(
    settings: FileManagerSettings,
    root: Optional[str] = None,
    preview: Optional[str] = None,
    limit: Optional[int] = None,
    port: Optional[int] = None,
) -> FileManagerSettings:
    """Get a copy of ``settings`` with the given command line values applied."""
    update: Dict[str, Any] = {}
    if root:
        update["root"] = root
    if preview is not None:
        update["preview"] = preview
    if limit is not None:
        update["upload_limit"] = limit
    if port is not None:
        update["server"] = settings.server.model_copy(update={"port": port})
    return settings.model_copy(update=update)


@click.command()
@click.argument("root", required=False, type=click.Path(file_okay=False))
@click.option("--preview", default=None, help="Preview service URL, or 'none' to disable previews")
@click.option("--limit", type=int, default=None, help="Max size of an uploaded file, in bytes")
@click.option("--port", type=int, default=None, help="Port to listen on")
def main(root: Optional[str], preview: Optional[str], limit: Optional[int], port: Optional[int]) -> None:
    """Run the file manager backend serving ROOT."""
    LoggingConfig.configure()
    load_environment(Path.cwd())

    settings = apply_overrides(FileManagerSettings(), root, preview, limit, port)
    app = create_app(settings)

    logger.info(f"Starting neo-files on {settings.server.host}:{settings.server.port}")
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level="info",
        access_log=False,
    )


if __name__ == "__main__":
    main()
