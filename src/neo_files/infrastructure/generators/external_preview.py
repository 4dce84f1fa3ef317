"""External preview proxy.

Streams a source file to a remote rendering service as a multipart request
and streams the rendered image back to disk. Neither the upload nor the
response is held in memory as a whole.

The request carries four form parts, in order: ``width``, ``height``,
``name`` and ``file``.
"""

import asyncio
import logging
from pathlib import Path
from typing import BinaryIO

import httpx

from ...core.exceptions import ExternalPreviewError, PreviewGenerationFailed
from ...core.value_objects import (
    GenerationOutcome,
    JPEG_EXTENSION,
    PNG_EXTENSION,
    PreviewArtifact,
    PreviewDimensions,
)
from .multipart_pipe import MultipartPipe, DEFAULT_DEPTH

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


def extension_for_content_type(content_type: str) -> str:
    """``image/png`` responses are stored as .png, anything else as .jpg."""
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    return PNG_EXTENSION if media_type == "image/png" else JPEG_EXTENSION


class ExternalPreviewProxy:
    """Client of an external preview rendering service."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        service_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        pipe_depth: int = DEFAULT_DEPTH,
    ):
        self._client = client
        self._service_url = service_url
        self._timeout = timeout
        self._pipe_depth = pipe_depth

    @property
    def service_url(self) -> str:
        return self._service_url

    async def render(
        self,
        source: BinaryIO,
        artifact: PreviewArtifact,
        name: str,
        dimensions: PreviewDimensions,
    ) -> GenerationOutcome:
        """Render a preview remotely and store it next to the artifact base.

        Raises:
            ExternalPreviewError: On transport errors or a non-200 response
            PreviewGenerationFailed: If the response can't be written to disk
        """
        pipe = MultipartPipe(depth=self._pipe_depth)
        producer = asyncio.create_task(self._produce(pipe, source, name, dimensions))

        try:
            async with self._client.stream(
                "POST",
                self._service_url,
                content=pipe.body(),
                headers={"Content-Type": pipe.content_type},
                timeout=self._timeout,
            ) as response:
                if response.status_code != 200:
                    raise ExternalPreviewError(
                        f"preview service {response.status_code}",
                        status_code=response.status_code,
                    )

                extension = extension_for_content_type(response.headers.get("content-type", ""))
                target = artifact.path_for(extension)
                written = await self._persist(response, target)

        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ExternalPreviewError(f"preview service {e}") from e
        finally:
            producer.cancel()
            await asyncio.gather(producer, return_exceptions=True)

        logger.debug(f"Stored remote preview {target.name} ({written} bytes)")
        return GenerationOutcome(extension=extension, path=target)

    async def _produce(
        self,
        pipe: MultipartPipe,
        source: BinaryIO,
        name: str,
        dimensions: PreviewDimensions,
    ) -> None:
        try:
            await pipe.write_field("width", str(dimensions.width))
            await pipe.write_field("height", str(dimensions.height))
            await pipe.write_field("name", name)
            await pipe.write_file("file", name, source)
            await pipe.close()
        except Exception as e:
            logger.warning(f"Can't stream {name} to preview service: {e}")
            await pipe.abort(PreviewGenerationFailed(f"Can't read {name}: {e}", generator="external"))

    @staticmethod
    async def _persist(response: httpx.Response, target: Path) -> int:
        written = 0
        try:
            handle = await asyncio.to_thread(target.open, "wb")
            try:
                async for chunk in response.aiter_bytes():
                    await asyncio.to_thread(handle.write, chunk)
                    written += len(chunk)
            finally:
                await asyncio.to_thread(handle.close)
        except OSError as e:
            target.unlink(missing_ok=True)
            raise PreviewGenerationFailed(f"Can't save preview {target.name}: {e}", generator="external") from e
        except BaseException:
            # keep the cache free of truncated artifacts
            target.unlink(missing_ok=True)
            raise
        return written
