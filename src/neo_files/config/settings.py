"""
Application settings and configuration management.

Settings are read from environment variables prefixed with ``APP_`` and an
optional ``.env`` file. Nested server options use a double underscore,
e.g. ``APP_SERVER__PORT=3200``.
"""
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Dict, Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Value of ``preview`` that switches preview generation off entirely
PREVIEW_DISABLED = "none"

DEFAULT_ICONS_DIR = Path(__file__).resolve().parent.parent / "icons"


@dataclass(frozen=True)
class PreviewConfig:
    """Preview engine configuration passed into each preview component."""

    service_url: str = ""
    enabled: bool = True
    max_source_bytes: int = 50 * 1000 * 1000
    max_dimension: int = 2000
    default_width: int = 214
    default_height: int = 163
    poll_interval: float = 0.1
    poll_deadline: float = 10.0
    remote_timeout: float = 60.0
    pipe_depth: int = 16

    @property
    def remote_enabled(self) -> bool:
        """Check if an external rendering service is configured."""
        return self.enabled and bool(self.service_url)


class ServerSettings(BaseModel):
    """HTTP server options."""

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3200)
    cors: List[str] = Field(default_factory=list)


class FileManagerSettings(BaseSettings):
    """neo-files settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="neo-files")
    environment: str = Field(default="development")

    server: ServerSettings = Field(default_factory=ServerSettings)

    # Storage
    root: str = Field(default="")
    upload_limit: int = Field(default=10_000_000)

    # Previews: empty string = local generation for images only,
    # "none" = no previews at all, any other value = rendering service URL
    preview: str = Field(default="")
    icons_dir: str = Field(default=str(DEFAULT_ICONS_DIR))

    preview_max_source_bytes: int = Field(default=50 * 1000 * 1000)
    preview_max_dimension: int = Field(default=2000)
    preview_default_width: int = Field(default=214)
    preview_default_height: int = Field(default=163)
    preview_poll_interval: float = Field(default=0.1)
    preview_poll_deadline: float = Field(default=10.0)
    preview_remote_timeout: float = Field(default=60.0)
    preview_pipe_depth: int = Field(default=16)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def previews_enabled(self) -> bool:
        return self.preview.strip().lower() != PREVIEW_DISABLED

    @property
    def preview_service_url(self) -> str:
        """Rendering service URL, empty when remote generation is off."""
        if not self.previews_enabled:
            return ""
        return self.preview.strip()

    def get_preview_config(self) -> PreviewConfig:
        """Get preview engine configuration as PreviewConfig."""
        return PreviewConfig(
            service_url=self.preview_service_url,
            enabled=self.previews_enabled,
            max_source_bytes=self.preview_max_source_bytes,
            max_dimension=self.preview_max_dimension,
            default_width=self.preview_default_width,
            default_height=self.preview_default_height,
            poll_interval=self.preview_poll_interval,
            poll_deadline=self.preview_poll_deadline,
            remote_timeout=self.preview_remote_timeout,
            pipe_depth=self.preview_pipe_depth,
        )

    def get_features(self) -> Dict[str, Dict[str, bool]]:
        """Get the preview/meta capabilities advertised to clients."""
        preview = {}
        if self.previews_enabled:
            preview["image"] = True
            if self.preview_service_url:
                preview["document"] = True
                preview["code"] = True
        return {
            "preview": preview,
            "meta": {"image": True, "audio": True, "folder": True},
        }

    def get_service_specific_config(self) -> Dict[str, Any]:
        """Get a loggable summary of the effective configuration."""
        return {
            "service_name": self.app_name,
            "root": self.root,
            "upload_limit": self.upload_limit,
            "preview": self.preview or "local",
            "port": self.server.port,
            "cors": self.server.cors,
        }


@lru_cache()
def get_settings() -> FileManagerSettings:
    """Get cached settings instance."""
    return FileManagerSettings()
