import pytest

from drivebridge.exceptions import IntegrationError, MissingParameterError, NotInitializedError, TransportError
from drivebridge.models.drive import DownloadedFile, FileRef, FolderRef, SuccessResponse
from conftest import DRIVE_API_FILE, DRIVE_API_LIST


@pytest.fixture(autouse=True)
def mock_svc(mocker):
    return mocker.patch("drivebridge.mcp_server.drive_service")


@pytest.fixture
def drive(mock_svc):
    return mock_svc.get_client.return_value


class TestDriveInitialize:
    def test_returns_success(self, drive):
        drive.initialize.return_value = SuccessResponse(success=True)
        from drivebridge.mcp_server import drive_initialize
        assert drive_initialize.fn(access_token="abc") == {"success": True}
        drive.initialize.assert_called_once_with("abc")


class TestDriveListFiles:
    def test_returns_raw_page(self, drive):
        drive.list_files.return_value = DRIVE_API_LIST
        from drivebridge.mcp_server import drive_list_files
        result = drive_list_files.fn(page_size=5)
        assert result["files"][0]["id"] == "file123"
        drive.list_files.assert_called_once_with(5, order_by=None, page_token=None)

    def test_not_initialized_returns_dict(self, drive):
        drive.list_files.side_effect = NotInitializedError()
        from drivebridge.mcp_server import drive_list_files
        result = drive_list_files.fn()
        assert result["error"] == "auth_error"
        assert result["code"] == "NOT_INITIALIZED"


class TestDriveSearch:
    def test_forwards_query(self, drive):
        drive.search_files.return_value = DRIVE_API_LIST
        from drivebridge.mcp_server import drive_search
        drive_search.fn(query="name contains 'report'", page_size=10)
        drive.search_files.assert_called_once_with(10, "name contains 'report'", None, None)

    def test_transport_error(self, drive):
        drive.search_files.side_effect = TransportError("timed out")
        from drivebridge.mcp_server import drive_search
        assert drive_search.fn(query="x") == {"error": "transport_error", "message": "timed out"}


class TestDriveGetFile:
    def test_returns_metadata(self, drive):
        drive.get_file_metadata.return_value = {"file": DRIVE_API_FILE}
        from drivebridge.mcp_server import drive_get_file
        assert drive_get_file.fn(file_id="file123")["file"]["name"] == "report.txt"

    def test_integration_error(self, drive):
        drive.get_file_metadata.side_effect = IntegrationError("File not found", status_code=404)
        from drivebridge.mcp_server import drive_get_file
        result = drive_get_file.fn(file_id="nope")
        assert result == {"error": "integration_error", "status": 404, "message": "File not found"}


class TestDriveDownloadFile:
    def test_returns_content(self, drive):
        drive.download_file.return_value = DownloadedFile(content="hello", name="a.txt", mime_type="text/plain")
        from drivebridge.mcp_server import drive_download_file
        assert drive_download_file.fn(file_id="f1") == {"content": "hello", "name": "a.txt", "mimeType": "text/plain"}


class TestDriveUploadFile:
    def test_returns_file_ref(self, drive):
        drive.upload_file.return_value = FileRef(file_id="new1")
        from drivebridge.mcp_server import drive_upload_file
        assert drive_upload_file.fn(name="a.txt", content="hello") == {"fileId": "new1"}
        drive.upload_file.assert_called_once_with("a.txt", "hello", "text/plain", None)

    def test_missing_parameter(self, drive):
        drive.upload_file.side_effect = MissingParameterError("name is required")
        from drivebridge.mcp_server import drive_upload_file
        assert drive_upload_file.fn(name="", content="x")["error"] == "missing_parameter"


class TestDriveUpdateFile:
    def test_returns_file_ref(self, drive):
        drive.update_file.return_value = FileRef(file_id="f1", web_view_link="https://x/f1")
        from drivebridge.mcp_server import drive_update_file
        result = drive_update_file.fn(file_id="f1", content="new")
        assert result == {"fileId": "f1", "webViewLink": "https://x/f1"}


class TestDriveDeleteFile:
    def test_returns_success(self, drive):
        drive.delete_file.return_value = SuccessResponse(success=True)
        from drivebridge.mcp_server import drive_delete_file
        assert drive_delete_file.fn(file_id="f1") == {"success": True}


class TestDriveCreateFolder:
    def test_returns_folder_id(self, drive):
        drive.create_folder.return_value = FolderRef(folder_id="fld1")
        from drivebridge.mcp_server import drive_create_folder
        assert drive_create_folder.fn(name="Reports", parent_folder_id="root1") == {"folderId": "fld1"}
        drive.create_folder.assert_called_once_with("Reports", "root1")
