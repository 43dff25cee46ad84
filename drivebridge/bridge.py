"""Pending-call bridge between an app shell and the DriveClient.

The shell hands over a method name and a bag of named parameters and expects
exactly one of resolve(data) or reject(message, code) in return.
"""

import logging
from typing import Any, Protocol

from pydantic import BaseModel

from drivebridge.exceptions import DriveBridgeError
from drivebridge.services.drive import DriveClient

logger = logging.getLogger(__name__)


class PendingCall(Protocol):
    def get_string(self, name: str, default: str | None = None) -> str | None: ...

    def get_int(self, name: str, default: int | None = None) -> int | None: ...

    def resolve(self, data: Any = None) -> None: ...

    def reject(self, message: str, code: str | None = None) -> None: ...


class PluginCall:
    """In-process PendingCall that records its outcome."""

    def __init__(self, method: str, params: dict | None = None):
        self.method = method
        self.params = dict(params or {})
        self.status: str | None = None
        self.data: Any = None
        self.error_message: str | None = None
        self.error_code: str | None = None

    def get_string(self, name: str, default: str | None = None) -> str | None:
        value = self.params.get(name)
        return value if isinstance(value, str) else default

    def get_int(self, name: str, default: int | None = None) -> int | None:
        value = self.params.get(name)
        if isinstance(value, bool) or not isinstance(value, int):
            return default
        return value

    def resolve(self, data: Any = None) -> None:
        self.status = "resolved"
        self.data = data

    def reject(self, message: str, code: str | None = None) -> None:
        self.status = "rejected"
        self.error_message = message
        self.error_code = code


def _to_result(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True)
    return value


class DriveBridge:
    """Dispatches shell method names (initialize, listFiles, ...) onto a DriveClient."""

    def __init__(self, client: DriveClient):
        self.client = client
        self._handlers = {
            "initialize": self._initialize,
            "listFiles": self._list_files,
            "getFileMetadata": self._get_file_metadata,
            "uploadFile": self._upload_file,
            "downloadFile": self._download_file,
            "updateFile": self._update_file,
            "deleteFile": self._delete_file,
            "createFolder": self._create_folder,
            "searchFiles": self._search_files,
        }

    @property
    def methods(self) -> list[str]:
        return list(self._handlers)

    def handle(self, method: str, call: PendingCall) -> None:
        handler = self._handlers.get(method)
        if handler is None:
            call.reject(f"Method not implemented: {method}", "UNIMPLEMENTED")
            return
        try:
            result = handler(call)
        except DriveBridgeError as e:
            logger.debug("Bridge call %s rejected: %s", method, e.code or type(e).__name__)
            call.reject(str(e), e.code)
            return
        except Exception as e:
            logger.exception("Bridge call %s failed unexpectedly", method)
            call.reject(str(e))
            return
        call.resolve(_to_result(result))

    def _initialize(self, call: PendingCall):
        return self.client.initialize(call.get_string("accessToken"))

    def _list_params(self, call: PendingCall) -> dict:
        return {
            "page_size": call.get_int("pageSize"),
            "query": call.get_string("query"),
            "order_by": call.get_string("orderBy"),
            "page_token": call.get_string("pageToken"),
        }

    def _list_files(self, call: PendingCall):
        return self.client.list_files(**self._list_params(call))

    def _search_files(self, call: PendingCall):
        return self.client.search_files(**self._list_params(call))

    def _get_file_metadata(self, call: PendingCall):
        return self.client.get_file_metadata(call.get_string("fileId"))

    def _upload_file(self, call: PendingCall):
        return self.client.upload_file(
            call.get_string("name"),
            call.get_string("content"),
            call.get_string("mimeType"),
            call.get_string("folderId"),
        )

    def _download_file(self, call: PendingCall):
        return self.client.download_file(call.get_string("fileId"))

    def _update_file(self, call: PendingCall):
        return self.client.update_file(
            call.get_string("fileId"),
            call.get_string("content"),
            call.get_string("mimeType"),
        )

    def _delete_file(self, call: PendingCall):
        return self.client.delete_file(call.get_string("fileId"))

    def _create_folder(self, call: PendingCall):
        return self.client.create_folder(call.get_string("name"), call.get_string("parentFolderId"))
