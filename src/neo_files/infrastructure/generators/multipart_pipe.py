"""Streaming multipart/form-data body.

A producer writes form fields and file content into a bounded queue while
the HTTP client consumes the queue as the request body. The queue depth
bounds the memory in use; a slow network fills the queue and suspends the
producer.
"""

import asyncio
import logging
import secrets
from typing import AsyncIterator, BinaryIO, Optional

logger = logging.getLogger(__name__)

DEFAULT_DEPTH = 16
DEFAULT_CHUNK_SIZE = 64 * 1024

CRLF = b"\r\n"


def _escape_quotes(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


class MultipartPipe:
    """Bounded producer/consumer pipe carrying a multipart body."""

    def __init__(
        self,
        boundary: Optional[str] = None,
        depth: int = DEFAULT_DEPTH,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self.boundary = boundary or secrets.token_hex(16)
        self._queue: "asyncio.Queue[Optional[bytes]]" = asyncio.Queue(maxsize=depth)
        self._chunk_size = chunk_size
        self._parts = 0
        self._closed = False
        self._error: Optional[BaseException] = None

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    # Producer side

    async def write_field(self, name: str, value: str) -> None:
        await self._begin_part(f'form-data; name="{_escape_quotes(name)}"')
        await self._queue.put(value.encode("utf-8"))

    async def write_file(self, name: str, filename: str, stream: BinaryIO) -> int:
        """Copy a file part chunk by chunk, returning the bytes written."""
        await self._begin_part(
            f'form-data; name="{_escape_quotes(name)}"; filename="{_escape_quotes(filename)}"',
            content_type="application/octet-stream",
        )
        written = 0
        while True:
            chunk = await asyncio.to_thread(stream.read, self._chunk_size)
            if not chunk:
                break
            written += len(chunk)
            await self._queue.put(chunk)
        return written

    async def close(self) -> None:
        """Write the closing boundary and end the body."""
        if self._closed:
            return
        self._closed = True
        await self._queue.put(CRLF + b"--" + self.boundary.encode("ascii") + b"--" + CRLF)
        await self._queue.put(None)

    async def abort(self, error: BaseException) -> None:
        """End the body with an error raised on the consumer side."""
        if self._closed:
            return
        self._closed = True
        self._error = error
        logger.debug(f"Multipart body aborted after {self._parts} parts: {error}")
        await self._queue.put(None)

    async def _begin_part(self, disposition: str, content_type: Optional[str] = None) -> None:
        if self._closed:
            raise RuntimeError("multipart body already closed")
        delimiter = b"--" + self.boundary.encode("ascii") + CRLF
        if self._parts:
            delimiter = CRLF + delimiter
        self._parts += 1

        header = f"Content-Disposition: {disposition}\r\n"
        if content_type:
            header += f"Content-Type: {content_type}\r\n"
        await self._queue.put(delimiter + header.encode("utf-8") + CRLF)

    # Consumer side

    async def body(self) -> AsyncIterator[bytes]:
        """Yield body chunks until the producer closes the pipe."""
        while True:
            chunk = await self._queue.get()
            if chunk is None:
                break
            yield chunk
        if self._error is not None:
            raise self._error

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self.body()
