import json

import pytest
import requests
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from drivebridge.config import Settings
from drivebridge.services.drive import DriveClient

TOKEN = "ya29.test-token"

DRIVE_BASE = "https://www.googleapis.com/drive/v3"
UPLOAD_BASE = "https://www.googleapis.com/upload/drive/v3"


# --- Canned API responses ---

DRIVE_API_FILE = {
    "id": "file123",
    "name": "report.txt",
    "mimeType": "text/plain",
    "size": "1024",
    "createdTime": "2025-01-01T00:00:00Z",
    "modifiedTime": "2025-01-02T00:00:00Z",
    "parents": ["folder789"],
    "webViewLink": "https://drive.google.com/file/d/file123/view",
}

DRIVE_API_LIST = {
    "files": [DRIVE_API_FILE],
    "nextPageToken": "page-2",
}

DRIVE_API_ERROR = {
    "error": {"code": 404, "message": "File not found: missing.", "errors": [{"reason": "notFound"}]},
}


def make_response(status: int = 200, body=None) -> requests.Response:
    """Build a real requests.Response; dict/list bodies are JSON-encoded."""
    resp = requests.Response()
    resp.status_code = status
    if body is None:
        resp._content = b""
    elif isinstance(body, (dict, list)):
        resp._content = json.dumps(body).encode("utf-8")
    elif isinstance(body, str):
        resp._content = body.encode("utf-8")
    else:
        resp._content = body
    return resp


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def mock_session():
    """Session whose request() is fully mocked; set return_value/side_effect per test."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def drive_client(mock_session, settings):
    """Initialized DriveClient wired to the mocked session."""
    return DriveClient(access_token=TOKEN, session=mock_session, settings=settings)


@pytest.fixture
def uninitialized_client(mock_session, settings):
    return DriveClient(session=mock_session, settings=settings)


@pytest.fixture
def api_client():
    """FastAPI TestClient for router tests."""
    from drivebridge.main import api
    return TestClient(api)
