from fastmcp import FastMCP

from drivebridge.exceptions import (
    AuthenticationError,
    DriveBridgeError,
    IntegrationError,
    MissingParameterError,
    TransportError,
)
from drivebridge.services import drive as drive_service

mcp = FastMCP("Drivebridge")


def _handle_mcp_error(e: Exception) -> dict:
    """Convert exceptions to agent-friendly error dicts."""
    if isinstance(e, AuthenticationError):
        return {
            "error": "auth_error",
            "code": e.code,
            "message": str(e),
            "action": "Call drive_initialize with a valid OAuth access token",
        }
    if isinstance(e, MissingParameterError):
        return {"error": "missing_parameter", "message": str(e)}
    if isinstance(e, IntegrationError):
        return {"error": "integration_error", "status": e.status_code, "message": str(e)}
    if isinstance(e, TransportError):
        return {"error": "transport_error", "message": str(e)}
    return {"error": "unknown_error", "message": str(e)}


@mcp.tool
def drive_initialize(access_token: str) -> dict:
    """Set the OAuth bearer token used for every later Drive call. Must be called first."""
    try:
        return drive_service.get_client().initialize(access_token).model_dump()
    except DriveBridgeError as e:
        return _handle_mcp_error(e)


@mcp.tool
def drive_list_files(page_size: int = 100, order_by: str | None = None, page_token: str | None = None) -> dict:
    """List one page of Drive files. Pass the returned nextPageToken as page_token to get the next page."""
    try:
        return drive_service.get_client().list_files(page_size, order_by=order_by, page_token=page_token)
    except DriveBridgeError as e:
        return _handle_mcp_error(e)


@mcp.tool
def drive_search(query: str, page_size: int = 100, order_by: str | None = None, page_token: str | None = None) -> dict:
    """Search files using Drive query syntax (e.g. "name contains 'report'" or "mimeType = 'text/plain'")."""
    try:
        return drive_service.get_client().search_files(page_size, query, order_by, page_token)
    except DriveBridgeError as e:
        return _handle_mcp_error(e)


@mcp.tool
def drive_get_file(file_id: str) -> dict:
    """Get metadata (name, mimeType, size, links, parents) for a file by ID."""
    try:
        return drive_service.get_client().get_file_metadata(file_id)
    except DriveBridgeError as e:
        return _handle_mcp_error(e)


@mcp.tool
def drive_download_file(file_id: str) -> dict:
    """Download a file's content as text along with its name and mimeType."""
    try:
        return drive_service.get_client().download_file(file_id).model_dump(by_alias=True)
    except DriveBridgeError as e:
        return _handle_mcp_error(e)


@mcp.tool
def drive_upload_file(name: str, content: str, mime_type: str = "text/plain", folder_id: str | None = None) -> dict:
    """Create a new text file in Drive, optionally inside a folder. Returns fileId and webViewLink."""
    try:
        return drive_service.get_client().upload_file(name, content, mime_type, folder_id).model_dump(
            by_alias=True, exclude_none=True
        )
    except DriveBridgeError as e:
        return _handle_mcp_error(e)


@mcp.tool
def drive_update_file(file_id: str, content: str, mime_type: str = "text/plain") -> dict:
    """Replace the content of an existing file. The file name is not changed."""
    try:
        return drive_service.get_client().update_file(file_id, content, mime_type).model_dump(
            by_alias=True, exclude_none=True
        )
    except DriveBridgeError as e:
        return _handle_mcp_error(e)


@mcp.tool
def drive_delete_file(file_id: str) -> dict:
    """Permanently delete a file by ID."""
    try:
        return drive_service.get_client().delete_file(file_id).model_dump()
    except DriveBridgeError as e:
        return _handle_mcp_error(e)


@mcp.tool
def drive_create_folder(name: str, parent_folder_id: str | None = None) -> dict:
    """Create a folder, optionally inside another folder. Returns folderId."""
    try:
        return drive_service.get_client().create_folder(name, parent_folder_id).model_dump(by_alias=True)
    except DriveBridgeError as e:
        return _handle_mcp_error(e)
