"""File listing and CRUD routes."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query

from ...application.services import FileService
from ..dependencies import get_file_service
from ..models import (
    EntryListResultResponse,
    EntryResponse,
    EntryResultResponse,
    FileUpdateRequest,
    NewFileRequest,
    RemoveRequest,
)

router = APIRouter(
    prefix="/files",
    tags=["Files"],
    responses={500: {"description": "Operation failed"}},
)


def to_id(path: str) -> str:
    """Route paths carry identifiers without their leading slash."""
    return "/" + path.lstrip("/")


@router.get("", summary="List the root folder")
async def list_root(
    text: str = Query("", description="Recursive, case-insensitive name search"),
    service: FileService = Depends(get_file_service),
) -> List[Dict[str, Any]]:
    return await service.list_files("/", text)


@router.get("/{path:path}", summary="List a folder")
async def list_folder(
    path: str,
    text: str = Query("", description="Recursive, case-insensitive name search"),
    service: FileService = Depends(get_file_service),
) -> List[Dict[str, Any]]:
    return await service.list_files(to_id(path), text)


@router.put("", response_model=EntryListResultResponse, summary="Move or copy entries")
async def transfer_files(
    data: FileUpdateRequest,
    service: FileService = Depends(get_file_service),
) -> EntryListResultResponse:
    results = await service.transfer(data.operation, data.ids, data.target)
    return EntryListResultResponse(result=[EntryResponse.from_result(r) for r in results])


@router.put("/{path:path}", response_model=EntryResultResponse, summary="Rename an entry")
async def rename_file(
    path: str,
    data: FileUpdateRequest,
    service: FileService = Depends(get_file_service),
) -> EntryResultResponse:
    result = await service.rename(to_id(path), data.operation, data.name)
    return EntryResultResponse(result=EntryResponse.from_result(result))


@router.post("", response_model=EntryResultResponse, summary="Create an entry in the root folder")
async def create_in_root(
    data: NewFileRequest,
    service: FileService = Depends(get_file_service),
) -> EntryResultResponse:
    result = await service.create("/", data.name, data.type)
    return EntryResultResponse(result=EntryResponse.from_result(result))


@router.post("/{path:path}", response_model=EntryResultResponse, summary="Create an entry")
async def create_file(
    path: str,
    data: NewFileRequest,
    service: FileService = Depends(get_file_service),
) -> EntryResultResponse:
    result = await service.create(to_id(path), data.name, data.type)
    return EntryResultResponse(result=EntryResponse.from_result(result))


@router.delete("", summary="Remove entries")
async def remove_files(
    data: RemoveRequest,
    service: FileService = Depends(get_file_service),
) -> Dict[str, Any]:
    await service.remove(data.ids)
    return {}
