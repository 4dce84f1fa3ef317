"""FastAPI dependencies resolving the services created by the app lifespan."""

from fastapi import Request

from ..application.services import FileService, IconResolver, MetaService, PreviewService
from ..config.settings import FileManagerSettings


def get_app_settings(request: Request) -> FileManagerSettings:
    return request.app.state.settings


def get_file_service(request: Request) -> FileService:
    return request.app.state.file_service


def get_meta_service(request: Request) -> MetaService:
    return request.app.state.meta_service


def get_preview_service(request: Request) -> PreviewService:
    return request.app.state.preview_service


def get_icon_resolver(request: Request) -> IconResolver:
    return request.app.state.icons
