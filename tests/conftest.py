"""Pytest configuration and fixtures for neo-files tests."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from neo_files.app import create_app
from neo_files.application.services import IconResolver
from neo_files.config.settings import DEFAULT_ICONS_DIR, FileManagerSettings, PreviewConfig
from neo_files.infrastructure.storage import LocalDrive


def make_image(path: Path, size=(400, 300), color=(200, 40, 40), format="JPEG") -> Path:
    """Write a solid color image with Pillow."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color).save(path, format=format)
    return path


@pytest.fixture
def storage_root(tmp_path):
    """Storage root with a few files and folders.

    /photos/a.jpg      400x300 JPEG
    /photos/b.png      120x80 PNG
    /docs/readme.txt
    /docs/broken.jpg   not an image
    /empty/
    """
    root = tmp_path / "storage"
    root.mkdir()
    make_image(root / "photos" / "a.jpg")
    make_image(root / "photos" / "b.png", size=(120, 80), format="PNG")
    (root / "docs").mkdir()
    (root / "docs" / "readme.txt").write_text("hello neo-files\n")
    (root / "docs" / "broken.jpg").write_bytes(b"this is not a jpeg")
    (root / "empty").mkdir()
    return root


@pytest.fixture
def drive(storage_root):
    return LocalDrive(str(storage_root))


@pytest.fixture
def icons():
    return IconResolver(str(DEFAULT_ICONS_DIR))


@pytest.fixture
def preview_config():
    """Local generation with a short poll deadline."""
    return PreviewConfig(poll_interval=0.01, poll_deadline=0.05)


@pytest.fixture
def settings(storage_root):
    return FileManagerSettings(
        root=str(storage_root),
        preview="",
        preview_poll_interval=0.01,
        preview_poll_deadline=0.05,
    )


@pytest.fixture
def client(settings):
    """Test client with the lifespan running."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client
