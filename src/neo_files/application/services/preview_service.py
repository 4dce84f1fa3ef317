"""Preview cache orchestrator.

Serves thumbnails from the ``.preview`` cache next to each source file,
generating them on first request. The preview endpoint never fails: every
path that can't produce a thumbnail ends in a static icon.

Request flow:
1. Resolve metadata (bounded polling); unknown file -> "unavailable" icon
2. Size/dimension ceilings -> icon, nothing cached
3. Cached artifact -> serve it; cached placeholder -> icon
4. Cache miss -> generate (remote service or Pillow); on failure store a
   zero-byte placeholder so the key is never retried
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ...config.settings import PreviewConfig
from ...core.entities.file_metadata import FileMetadata
from ...core.exceptions import ConfigurationError, NeoFilesError, PreviewGenerationFailed
from ...core.protocols.storage_drive import StorageDrive
from ...core.value_objects import (
    ArtifactState,
    GenerationOutcome,
    PreviewArtifact,
    PreviewDimensions,
    PreviewKey,
    extension_of,
)
from ...infrastructure.generators import ExternalPreviewProxy, LocalThumbnailGenerator
from .generator_selection import GeneratorKind, select_generator
from .icon_resolver import FOLDER_ICON, UNAVAILABLE_ICON, IconResolver
from .metadata_poller import MetadataPoller
from .single_flight import SingleFlight

logger = logging.getLogger(__name__)

ICON_MEDIA_TYPE = "image/svg+xml"
ICON_SIZE = "big"


@dataclass(frozen=True)
class PreviewResult:
    """What the preview endpoint sends back."""

    path: Path
    media_type: str
    is_icon: bool = False


class PreviewService:
    """Coordinates cache lookups, generation and icon fallbacks."""

    def __init__(
        self,
        drive: StorageDrive,
        config: PreviewConfig,
        icons: IconResolver,
        local_generator: Optional[LocalThumbnailGenerator] = None,
        remote_proxy: Optional[ExternalPreviewProxy] = None,
        poller: Optional[MetadataPoller] = None,
    ):
        self._drive = drive
        self._config = config
        self._icons = icons
        self._local = local_generator or LocalThumbnailGenerator()
        self._remote = remote_proxy
        self._poller = poller or MetadataPoller(drive, config.poll_interval, config.poll_deadline)
        self._inflight = SingleFlight()

        if config.remote_enabled and remote_proxy is None:
            raise ConfigurationError("A remote proxy is required when a preview service is configured")

    @property
    def config(self) -> PreviewConfig:
        return self._config

    async def get_preview(
        self,
        file_id: str,
        width: Optional[str] = None,
        height: Optional[str] = None,
    ) -> PreviewResult:
        """Get the preview of a file at the requested size, or an icon.

        Never raises except on cancellation.
        """
        try:
            return await self._get_preview(file_id, width, height)
        except Exception as e:
            logger.error(f"Unexpected error previewing {file_id!r}: {e}", exc_info=True)
            return self._icon(UNAVAILABLE_ICON)

    async def _get_preview(
        self,
        file_id: str,
        width: Optional[str],
        height: Optional[str],
    ) -> PreviewResult:
        dimensions = PreviewDimensions.parse(
            width, height, self._config.default_width, self._config.default_height
        )

        if not self._config.enabled:
            return self._icon(extension_of(file_id or ""))

        try:
            info = await self._poller.resolve(file_id)
        except NeoFilesError:
            return self._icon(UNAVAILABLE_ICON)

        if info.size > self._config.max_source_bytes or dimensions.exceeds(self._config.max_dimension):
            # cost limits, checked again on every request
            logger.debug(f"Preview of {info.id} at {dimensions} rejected by size limits")
            return self.fallback_for(info)
        if info.is_folder:
            # the root has no parent to hold a cache folder
            return self.fallback_for(info)

        artifact = PreviewArtifact.for_source(self._drive.local_path(info.id), dimensions)
        lookup = artifact.probe()
        if lookup.state == ArtifactState.READY:
            return self._artifact(GenerationOutcome(extension=lookup.path.suffix, path=lookup.path))
        if lookup.state == ArtifactState.UNAVAILABLE:
            return self.fallback_for(info)

        key = PreviewKey(info.id, dimensions)
        outcome = await self._inflight.do(key, lambda: self._generate(info, artifact, dimensions))
        if outcome is None:
            return self.fallback_for(info)
        return self._artifact(outcome)

    def fallback_for(self, info: Optional[FileMetadata]) -> PreviewResult:
        """Icon shown instead of a preview of ``info``."""
        if info is None:
            return self._icon(UNAVAILABLE_ICON)
        if info.is_folder:
            return self._icon(FOLDER_ICON)
        return self._icon(info.extension)

    async def _generate(
        self,
        info: FileMetadata,
        artifact: PreviewArtifact,
        dimensions: PreviewDimensions,
    ) -> Optional[GenerationOutcome]:
        # another worker may have finished between the probe and now
        lookup = artifact.probe()
        if lookup.state == ArtifactState.READY:
            return GenerationOutcome(extension=lookup.path.suffix, path=lookup.path)
        if lookup.state == ArtifactState.UNAVAILABLE:
            return None

        generator = select_generator(self._config.remote_enabled, info.kind)
        try:
            await asyncio.to_thread(artifact.ensure_folder)
            if generator == GeneratorKind.EXTERNAL:
                outcome = await self._render_remote(info, artifact, dimensions)
            elif generator == GeneratorKind.LOCAL:
                outcome = await self._local.generate(self._drive.local_path(info.id), dimensions, artifact)
            else:
                raise PreviewGenerationFailed(
                    f"No preview generator for {info.kind.value} files",
                    file_id=info.id,
                )
        except (NeoFilesError, OSError) as e:
            logger.warning(f"Preview of {info.id} at {dimensions} failed: {e}")
            self._mark_unavailable(artifact)
            return None
        except Exception as e:
            logger.error(f"Preview generator crashed on {info.id} at {dimensions}: {e}", exc_info=True)
            self._mark_unavailable(artifact)
            return None

        logger.info(f"Generated preview {outcome.path.name} for {info.id} ({generator.value})")
        return outcome

    async def _render_remote(
        self,
        info: FileMetadata,
        artifact: PreviewArtifact,
        dimensions: PreviewDimensions,
    ) -> GenerationOutcome:
        source = await self._drive.read(info.id)
        try:
            return await self._remote.render(source, artifact, info.name, dimensions)
        finally:
            await asyncio.to_thread(source.close)

    def _mark_unavailable(self, artifact: PreviewArtifact) -> None:
        try:
            artifact.mark_unavailable()
        except OSError as e:
            logger.error(f"Can't write preview placeholder {artifact.placeholder_path}: {e}")

    def _artifact(self, outcome: GenerationOutcome) -> PreviewResult:
        return PreviewResult(path=outcome.path, media_type=outcome.media_type)

    def _icon(self, name: str) -> PreviewResult:
        return PreviewResult(
            path=self._icons.resolve_icon(name, ICON_SIZE),
            media_type=ICON_MEDIA_TYPE,
            is_icon=True,
        )
