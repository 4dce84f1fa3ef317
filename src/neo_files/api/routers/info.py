"""Storage statistics, meta information and feature routes."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from ...application.services import FileService, MetaService
from ...config.settings import FileManagerSettings
from ..dependencies import get_app_settings, get_file_service, get_meta_service
from ..models import StorageStatsResponse
from .files import to_id

router = APIRouter(tags=["Info"])


@router.get("/info", response_model=StorageStatsResponse, summary="Get storage usage")
async def storage_info(service: FileService = Depends(get_file_service)) -> StorageStatsResponse:
    return StorageStatsResponse(**await service.stats())


@router.get("/info/{path:path}", summary="Get meta information of an entry")
async def meta_info(
    path: str,
    service: MetaService = Depends(get_meta_service),
) -> Optional[Dict[str, Any]]:
    return await service.get_meta(to_id(path))


@router.get("/features", summary="Get preview and meta capabilities")
async def features(settings: FileManagerSettings = Depends(get_app_settings)) -> Dict[str, Dict[str, bool]]:
    return settings.get_features()
