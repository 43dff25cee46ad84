import json
import logging
from functools import lru_cache
from typing import TypeVar
from urllib.parse import quote, urlencode

import requests
from pydantic import BaseModel, ValidationError

from drivebridge.config import Settings, get_settings
from drivebridge.exceptions import (
    IntegrationError,
    MissingParameterError,
    MissingTokenError,
    NotInitializedError,
    TransportError,
)
from drivebridge.http_client import get_session
from drivebridge.models.drive import DownloadedFile, FileRef, FolderRef, SuccessResponse
from drivebridge.services import multipart

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

FIELDS = "id,name,mimeType,createdTime,modifiedTime,size,webViewLink,webContentLink,iconLink,thumbnailLink,parents"
LIST_FIELDS = f"files({FIELDS}),nextPageToken"
DOWNLOAD_FIELDS = "id,name,mimeType"
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"

# Left literal so the fields projection goes out as written.
_QUERY_SAFE = "(),"


def _query_string(params: dict) -> str:
    return urlencode({k: v for k, v in params.items() if v is not None}, safe=_QUERY_SAFE, quote_via=quote)


def _is_success(status_code: int) -> bool:
    return 200 <= status_code <= 299


def _body_text(resp: requests.Response) -> str:
    if not resp.content:
        return ""
    return resp.content.decode("utf-8", errors="replace")


def _str_field(data: dict, key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _require(**params):
    missing = [name for name, value in params.items() if value is None or value == ""]
    if missing:
        raise MissingParameterError(f"{', '.join(missing)} {'is' if len(missing) == 1 else 'are'} required")


class DriveClient:
    """Minimal Drive v3 REST client bound to a single bearer token.

    The token is set once via initialize() and read by every later call.
    """

    def __init__(
        self,
        access_token: str | None = None,
        session: requests.Session | None = None,
        settings: Settings | None = None,
    ):
        self._access_token = access_token or None
        self._session = session
        self._settings = settings or get_settings()

    @property
    def initialized(self) -> bool:
        return self._access_token is not None

    @property
    def session(self) -> requests.Session:
        return self._session if self._session is not None else get_session()

    def initialize(self, access_token: str | None) -> SuccessResponse:
        """Store the bearer token, replacing any previous one."""
        if not access_token:
            raise MissingTokenError()
        self._access_token = access_token
        return SuccessResponse(success=True)

    # --- transport ---

    def _headers(self, extra: dict | None = None) -> dict:
        return {"Authorization": f"Bearer {self._access_token}", **(extra or {})}

    def _ensure_initialized(self):
        if self._access_token is None:
            raise NotInitializedError()

    def _request(self, method: str, url: str, *, data: bytes | None = None, headers: dict | None = None) -> requests.Response:
        logger.debug("Drive request %s %s", method, url)
        try:
            resp = self.session.request(method, url, headers=self._headers(headers), data=data)
        except requests.RequestException as e:
            raise TransportError(str(e)) from e
        if not _is_success(resp.status_code):
            logger.warning("Drive API %s %s returned HTTP %s", method, url, resp.status_code)
            raise IntegrationError(_body_text(resp), status_code=resp.status_code)
        return resp

    def _json(self, resp: requests.Response) -> dict:
        try:
            data = json.loads(_body_text(resp))
        except ValueError as e:
            raise IntegrationError(f"Invalid JSON in Drive API response: {e}", status_code=resp.status_code) from e
        if not isinstance(data, dict):
            raise IntegrationError(
                f"Expected a JSON object from Drive API, got {type(data).__name__}", status_code=resp.status_code
            )
        return data

    def _project(self, model: type[ModelT], resp: requests.Response) -> ModelT:
        try:
            return model.model_validate(self._json(resp))
        except ValidationError as e:
            raise IntegrationError(f"Unexpected Drive API response: {e}", status_code=resp.status_code) from e

    def _files_url(self, file_id: str | None = None, upload: bool = False) -> str:
        base = self._settings.upload_api_base if upload else self._settings.drive_api_base
        url = f"{base.rstrip('/')}/files"
        if file_id is not None:
            url += f"/{quote(file_id, safe='')}"
        return url

    # --- operations ---

    def list_files(
        self,
        page_size: int | None = None,
        query: str | None = None,
        order_by: str | None = None,
        page_token: str | None = None,
    ) -> dict:
        """List one page of files. query is a Drive search expression, passed through untouched."""
        self._ensure_initialized()
        if page_size is None:
            page_size = self._settings.default_page_size
        params = {
            "pageSize": page_size,
            "fields": LIST_FIELDS,
            "q": query,
            "orderBy": order_by,
            "pageToken": page_token,
        }
        resp = self._request("GET", f"{self._files_url()}?{_query_string(params)}")
        return self._json(resp)

    def search_files(
        self,
        page_size: int | None = None,
        query: str | None = None,
        order_by: str | None = None,
        page_token: str | None = None,
    ) -> dict:
        return self.list_files(page_size=page_size, query=query, order_by=order_by, page_token=page_token)

    def get_file_metadata(self, file_id: str | None) -> dict:
        self._ensure_initialized()
        _require(fileId=file_id)
        resp = self._request("GET", f"{self._files_url(file_id)}?{_query_string({'fields': FIELDS})}")
        return {"file": self._json(resp)}

    def upload_file(
        self,
        name: str | None,
        content: str | None,
        mime_type: str | None,
        folder_id: str | None = None,
    ) -> FileRef:
        self._ensure_initialized()
        _require(name=name, mimeType=mime_type)
        if content is None:
            raise MissingParameterError("content is required")
        metadata: dict = {"name": name, "mimeType": mime_type}
        if folder_id:
            metadata["parents"] = [folder_id]
        url = f"{self._files_url(upload=True)}?uploadType=multipart"
        return self._send_multipart("POST", url, metadata, content, mime_type)

    def update_file(self, file_id: str | None, content: str | None, mime_type: str | None) -> FileRef:
        """Replace a file's content. Only mimeType travels as metadata; the name is left alone."""
        self._ensure_initialized()
        if file_id is None or content is None or mime_type is None:
            raise MissingParameterError("fileId, content, and mimeType are required")
        url = f"{self._files_url(file_id, upload=True)}?uploadType=multipart"
        return self._send_multipart("PATCH", url, {"mimeType": mime_type}, content, mime_type)

    def _send_multipart(self, method: str, url: str, metadata: dict, content: str, mime_type: str) -> FileRef:
        body = multipart.build_body(metadata, content, mime_type)
        resp = self._request(
            method,
            url,
            data=body.encode("utf-8"),
            headers={"Content-Type": multipart.content_type()},
        )
        return self._project(FileRef, resp)

    def download_file(self, file_id: str | None) -> DownloadedFile:
        """Fetch name/mimeType, then the raw content as UTF-8 text."""
        self._ensure_initialized()
        _require(fileId=file_id)
        meta_resp = self._request("GET", f"{self._files_url(file_id)}?{_query_string({'fields': DOWNLOAD_FIELDS})}")
        meta = self._json(meta_resp)

        content_resp = self._request("GET", f"{self._files_url(file_id)}?alt=media")
        return DownloadedFile(
            content=_body_text(content_resp),
            name=_str_field(meta, "name"),
            mime_type=_str_field(meta, "mimeType"),
        )

    def delete_file(self, file_id: str | None) -> SuccessResponse:
        self._ensure_initialized()
        _require(fileId=file_id)
        self._request("DELETE", self._files_url(file_id))
        return SuccessResponse(success=True)

    def create_folder(self, name: str | None, parent_folder_id: str | None = None) -> FolderRef:
        self._ensure_initialized()
        _require(name=name)
        metadata: dict = {"name": name, "mimeType": FOLDER_MIME_TYPE}
        if parent_folder_id:
            metadata["parents"] = [parent_folder_id]
        resp = self._request(
            "POST",
            self._files_url(),
            data=json.dumps(metadata, ensure_ascii=False).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )
        return self._project(FolderRef, resp)


@lru_cache
def get_client() -> DriveClient:
    """Return the process-wide client shared by the HTTP routes, bridge, and MCP tools."""
    return DriveClient()
