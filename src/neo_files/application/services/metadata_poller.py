"""Metadata poller.

Resolves an identifier to its metadata with bounded polling. The storage
drive may not reflect an entry that was created or renamed a moment ago
(e.g. an upload immediately followed by a preview request), so a failed
lookup is retried at a fixed interval until a deadline.
"""

import asyncio
import logging

from ...core.entities.file_metadata import FileMetadata
from ...core.exceptions import AccessDenied, NeoFilesError
from ...core.protocols.storage_drive import StorageDrive

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.1
DEFAULT_POLL_DEADLINE = 10.0


class MetadataPoller:
    """Bounded fixed-interval metadata lookup."""

    def __init__(
        self,
        drive: StorageDrive,
        interval: float = DEFAULT_POLL_INTERVAL,
        deadline: float = DEFAULT_POLL_DEADLINE,
    ):
        self._drive = drive
        self._interval = interval
        self._deadline = deadline

    async def resolve(self, file_id: str) -> FileMetadata:
        """Get metadata of an entry, retrying until the deadline.

        The wait suspends only the calling task and is cancellable.

        Raises:
            NeoFilesError: The last lookup failure once the deadline elapsed
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._deadline
        attempts = 0

        while True:
            attempts += 1
            try:
                return await self._drive.info(file_id)
            except AccessDenied:
                # outside of the root, no amount of waiting changes that
                raise
            except NeoFilesError as e:
                if loop.time() >= deadline:
                    logger.info(f"Metadata for {file_id} unavailable after {attempts} attempts: {e.message}")
                    raise
                logger.debug(f"Metadata for {file_id} not ready yet, retrying")

            await asyncio.sleep(self._interval)
