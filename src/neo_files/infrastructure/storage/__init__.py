"""Storage drive implementations."""

from .local_drive import LocalDrive

__all__ = ["LocalDrive"]
