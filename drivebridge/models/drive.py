from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class FileRef(BaseModel):
    """Projection of an upload/update response: id -> fileId, webViewLink -> webViewLink."""

    model_config = ConfigDict(populate_by_name=True)

    file_id: str | None = Field(default=None, validation_alias=AliasChoices("id", "fileId"), serialization_alias="fileId")
    web_view_link: str | None = Field(default=None, validation_alias="webViewLink", serialization_alias="webViewLink")


class FolderRef(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    folder_id: str = Field(default="", validation_alias=AliasChoices("id", "folderId"), serialization_alias="folderId")


class DownloadedFile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: str
    name: str = ""
    mime_type: str = Field(default="", validation_alias="mimeType", serialization_alias="mimeType")


class SuccessResponse(BaseModel):
    success: bool = True


class InitializeRequest(BaseModel):
    access_token: str | None = None


class UploadFileRequest(BaseModel):
    name: str
    content: str
    mime_type: str = "text/plain"
    folder_id: str | None = None


class UpdateFileRequest(BaseModel):
    content: str
    mime_type: str = "text/plain"


class CreateFolderRequest(BaseModel):
    name: str
    parent_folder_id: str | None = None
