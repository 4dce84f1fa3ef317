"""API request and response models."""

from .request import FileUpdateRequest, NewFileRequest, RemoveRequest
from .response import (
    EntryResponse,
    EntryResultResponse,
    EntryListResultResponse,
    StorageStatsResponse,
)

__all__ = [
    "FileUpdateRequest",
    "NewFileRequest",
    "RemoveRequest",
    "EntryResponse",
    "EntryResultResponse",
    "EntryListResultResponse",
    "StorageStatsResponse",
]
