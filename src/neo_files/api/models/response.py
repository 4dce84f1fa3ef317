"""File manager response models."""

from typing import List

from pydantic import BaseModel, Field

from ...application.services.file_service import OperationResult


class EntryResponse(BaseModel):
    """Identifier and name of an entry."""

    id: str = Field(..., description="Entry identifier")
    name: str = Field(..., description="Entry name")

    @classmethod
    def from_result(cls, result: OperationResult) -> "EntryResponse":
        return cls(id=result.id, name=result.name)


class EntryResultResponse(BaseModel):
    result: EntryResponse


class EntryListResultResponse(BaseModel):
    result: List[EntryResponse]


class StorageStatsResponse(BaseModel):
    """Storage usage in bytes."""

    used: int
    free: int
    total: int
