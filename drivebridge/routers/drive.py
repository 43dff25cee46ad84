from fastapi import APIRouter

from drivebridge.models.drive import (
    CreateFolderRequest,
    DownloadedFile,
    FileRef,
    FolderRef,
    InitializeRequest,
    SuccessResponse,
    UpdateFileRequest,
    UploadFileRequest,
)
from drivebridge.services import drive as drive_service

router = APIRouter(prefix="/api/drive", tags=["drive"])


@router.post("/initialize")
def initialize(request: InitializeRequest) -> SuccessResponse:
    return drive_service.get_client().initialize(request.access_token)


@router.get("/files")
def list_files(
    page_size: int | None = None,
    query: str | None = None,
    order_by: str | None = None,
    page_token: str | None = None,
) -> dict:
    return drive_service.get_client().list_files(page_size, query, order_by, page_token)


@router.get("/search")
def search_files(
    query: str | None = None,
    page_size: int | None = None,
    order_by: str | None = None,
    page_token: str | None = None,
) -> dict:
    return drive_service.get_client().search_files(page_size, query, order_by, page_token)


@router.get("/files/{file_id}")
def get_file_metadata(file_id: str) -> dict:
    return drive_service.get_client().get_file_metadata(file_id)


@router.get("/files/{file_id}/content")
def download_file(file_id: str) -> DownloadedFile:
    return drive_service.get_client().download_file(file_id)


@router.post("/files", response_model_exclude_none=True)
def upload_file(request: UploadFileRequest) -> FileRef:
    return drive_service.get_client().upload_file(request.name, request.content, request.mime_type, request.folder_id)


@router.patch("/files/{file_id}", response_model_exclude_none=True)
def update_file(file_id: str, request: UpdateFileRequest) -> FileRef:
    return drive_service.get_client().update_file(file_id, request.content, request.mime_type)


@router.delete("/files/{file_id}")
def delete_file(file_id: str) -> SuccessResponse:
    return drive_service.get_client().delete_file(file_id)


@router.post("/folders")
def create_folder(request: CreateFolderRequest) -> FolderRef:
    return drive_service.get_client().create_folder(request.name, request.parent_folder_id)
