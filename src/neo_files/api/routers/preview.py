"""Preview and icon routes.

Both always answer with an image: errors end in a fallback icon.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import FileResponse

from ...application.services import IconResolver, PreviewService
from ...application.services.preview_service import ICON_MEDIA_TYPE
from ..dependencies import get_icon_resolver, get_preview_service

router = APIRouter(tags=["Preview"])


@router.get("/preview", summary="Get a thumbnail of a file")
async def preview(
    id: str = Query(""),
    width: Optional[str] = Query(None),
    height: Optional[str] = Query(None),
    service: PreviewService = Depends(get_preview_service),
) -> FileResponse:
    result = await service.get_preview(id, width, height)
    return FileResponse(result.path, media_type=result.media_type)


@router.get("/icons/{size}/{name}", summary="Get an icon")
async def icon(
    size: str,
    name: str,
    icons: IconResolver = Depends(get_icon_resolver),
) -> FileResponse:
    return FileResponse(icons.resolve_asset(name, size), media_type=ICON_MEDIA_TYPE)
