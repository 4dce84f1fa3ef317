"""File manager request models."""

from typing import List, Optional

from pydantic import BaseModel, Field


class FileUpdateRequest(BaseModel):
    """Body of ``PUT /files`` and ``PUT /files/{id}``."""

    operation: str = Field("", description="rename, move or copy")
    name: str = Field("", description="New name (rename)")
    target: str = Field("", description="Target folder (move, copy)")
    ids: Optional[List[str]] = Field(None, description="Entries to move or copy")


class NewFileRequest(BaseModel):
    """Body of ``POST /files/{id}``."""

    type: str = Field("", description="file or folder")
    name: str = Field("", description="Name of the new entry")


class RemoveRequest(BaseModel):
    """Body of ``DELETE /files``."""

    ids: Optional[List[str]] = Field(None, description="Entries to remove")
