"""Local thumbnail generator.

Renders image previews with Pillow: a Lanczos fit-and-crop to exactly the
requested size, saved as JPEG.
"""

import asyncio
import logging
from pathlib import Path

from PIL import Image, ImageOps

from ...core.exceptions import PreviewGenerationFailed
from ...core.value_objects import GenerationOutcome, JPEG_EXTENSION, PreviewArtifact, PreviewDimensions

logger = logging.getLogger(__name__)

JPEG_QUALITY = 85


class LocalThumbnailGenerator:
    """Pillow based thumbnail renderer for raster images."""

    def __init__(self, quality: int = JPEG_QUALITY):
        self._quality = quality

    async def generate(
        self,
        source: Path,
        dimensions: PreviewDimensions,
        artifact: PreviewArtifact,
    ) -> GenerationOutcome:
        """Render ``source`` into the artifact's ``.jpg`` path.

        Raises:
            PreviewGenerationFailed: If the source can't be decoded or saved
        """
        target = artifact.path_for(JPEG_EXTENSION)
        await asyncio.to_thread(self._render, source, dimensions, target)
        return GenerationOutcome(extension=JPEG_EXTENSION, path=target)

    def _render(self, source: Path, dimensions: PreviewDimensions, target: Path) -> None:
        try:
            with Image.open(source) as image:
                image = ImageOps.exif_transpose(image)
                thumbnail = ImageOps.fit(
                    image,
                    (dimensions.width, dimensions.height),
                    method=Image.Resampling.LANCZOS,
                )
            if thumbnail.mode != "RGB":
                thumbnail = thumbnail.convert("RGB")
            thumbnail.save(target, format="JPEG", quality=self._quality)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise PreviewGenerationFailed(
                f"Can't render preview of {source.name}: {e}",
                generator="local",
            ) from e
        logger.debug(f"Rendered {target.name}")
