"""Download and upload routes."""

import mimetypes
from typing import BinaryIO, Iterator, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from fastapi.responses import StreamingResponse

from ...application.services import FileService
from ...config.settings import FileManagerSettings
from ...core.exceptions import InvalidOperation
from ..dependencies import get_app_settings, get_file_service
from ..models import EntryResponse, EntryResultResponse

router = APIRouter(tags=["Transfer"])

CHUNK_SIZE = 64 * 1024


def iter_stream(stream: BinaryIO) -> Iterator[bytes]:
    # sync iterator, Starlette runs it in the threadpool
    with stream:
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                break
            yield chunk


def content_disposition(name: str, download: bool) -> str:
    disposition = "attachment" if download else "inline"
    return f"{disposition}; filename=\"{quote(name)}\"; filename*=UTF-8''{quote(name)}"


@router.get("/direct", summary="Get the content of a file")
async def direct(
    request: Request,
    id: str = Query("", description="File identifier"),
    service: FileService = Depends(get_file_service),
) -> StreamingResponse:
    info, stream = await service.open(id)
    media_type = mimetypes.guess_type(info.name)[0] or "application/octet-stream"
    return StreamingResponse(
        iter_stream(stream),
        media_type=media_type,
        headers={
            "Content-Disposition": content_disposition(info.name, "download" in request.query_params),
            "Content-Length": str(info.size),
        },
    )


@router.post("/upload", response_model=EntryResultResponse, summary="Upload a file")
async def upload(
    request: Request,
    id: str = Query("/", description="Target folder"),
    file: Optional[UploadFile] = File(None),
    name: str = Form(""),
    service: FileService = Depends(get_file_service),
    settings: FileManagerSettings = Depends(get_app_settings),
) -> EntryResultResponse:
    declared = int(request.headers.get("content-length") or 0)
    if file is None:
        raise InvalidOperation("The file has not been uploaded")
    if declared > settings.upload_limit or (file.size or 0) > settings.upload_limit:
        raise InvalidOperation("The file is too large")

    try:
        result = await service.upload(id, name or file.filename or "", file.file)
    finally:
        await file.close()
    return EntryResultResponse(result=EntryResponse.from_result(result))
