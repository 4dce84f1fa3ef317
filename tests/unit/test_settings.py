"""Tests for settings and command line overrides."""

import pytest

from neo_files.config.settings import FileManagerSettings
from neo_files.main import apply_overrides


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("APP_PREVIEW", "APP_ROOT", "APP_UPLOAD_LIMIT", "APP_SERVER__PORT"):
        monkeypatch.delenv(name, raising=False)


class TestFileManagerSettings:
    """Test settings defaults and derived configuration."""

    def test_defaults(self):
        settings = FileManagerSettings(_env_file=None)
        assert settings.server.port == 3200
        assert settings.upload_limit == 10_000_000
        assert settings.previews_enabled
        assert settings.preview_service_url == ""

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("APP_PREVIEW", "http://renderer:3201/preview")
        monkeypatch.setenv("APP_SERVER__PORT", "8080")
        settings = FileManagerSettings(_env_file=None)

        assert settings.server.port == 8080
        assert settings.get_preview_config().remote_enabled

    def test_preview_config(self):
        config = FileManagerSettings(_env_file=None).get_preview_config()
        assert config.enabled
        assert not config.remote_enabled
        assert config.max_source_bytes == 50 * 1000 * 1000
        assert config.max_dimension == 2000
        assert (config.default_width, config.default_height) == (214, 163)
        assert (config.poll_interval, config.poll_deadline) == (0.1, 10.0)

    @pytest.mark.parametrize("value", ["none", "NONE", " none "])
    def test_previews_disabled(self, value):
        settings = FileManagerSettings(_env_file=None, preview=value)
        config = settings.get_preview_config()
        assert not config.enabled
        assert not config.remote_enabled
        assert settings.get_features()["preview"] == {}

    def test_features(self):
        local = FileManagerSettings(_env_file=None).get_features()
        remote = FileManagerSettings(_env_file=None, preview="http://renderer/preview").get_features()

        assert local["preview"] == {"image": True}
        assert remote["preview"] == {"image": True, "document": True, "code": True}
        assert local["meta"] == {"image": True, "audio": True, "folder": True}


class TestApplyOverrides:
    """Test command line values taking precedence over settings."""

    def test_overrides(self):
        settings = FileManagerSettings(_env_file=None)
        updated = apply_overrides(settings, root="/srv/files", preview="none", limit=1024, port=9000)

        assert updated.root == "/srv/files"
        assert not updated.previews_enabled
        assert updated.upload_limit == 1024
        assert updated.server.port == 9000
        assert settings.server.port == 3200

    def test_no_overrides(self):
        settings = FileManagerSettings(_env_file=None, preview="http://renderer/preview")
        assert apply_overrides(settings) == settings
