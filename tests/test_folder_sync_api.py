"""
Tests for the FolderSync API client

The requests session is replaced with mocks; no network access is needed.
"""

import gzip
import json
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from api import FolderSyncAPI, compress_payload, upload_headers
from exceptions import (
    FolderSyncAuthError,
    FolderSyncDecodeError,
    FolderSyncServerError
)
from models import User

UPLOAD_UUID = "6b0f7c8e-8f1c-4c43-9f0e-5a1d2c3b4a59"


def make_response(status_code=200, json_data=None, content=b"", text=""):
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.text = text
    if json_data is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = json_data
    return response


def make_api():
    return FolderSyncAPI("http://127.0.0.1", 3002, timeout=5)


def sent_json(call):
    return json.loads(gzip.decompress(call.kwargs["data"]))


def test_upload_item_posts_compressed_body():
    api = make_api()
    body = compress_payload(b'{"uuid": "x"}')

    with patch.object(api.session, "request",
                      return_value=make_response(json_data={"id": 1, "uuid": UPLOAD_UUID})) as request:
        result = api.upload_item(body)

    assert result == {"id": 1, "uuid": UPLOAD_UUID}
    method, url = request.call_args.args
    assert method == "POST"
    assert url == "http://127.0.0.1:3002/uploads"
    assert request.call_args.kwargs["data"] == body
    assert request.call_args.kwargs["headers"] == upload_headers(len(body))
    assert request.call_args.kwargs["timeout"] == 5


def test_upload_headers():
    assert upload_headers(42) == {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "Content-Length": "42",
        "Content-Encoding": "gzip, deflate"
    }


def test_non_json_response_returns_raw_content():
    api = make_api()

    with patch.object(api.session, "request", return_value=make_response(content=b"OK")):
        assert api.upload_item(b"") == b"OK"


def test_error_statuses():
    api = make_api()

    with patch.object(api.session, "request", return_value=make_response(401)):
        with pytest.raises(FolderSyncAuthError):
            api.upload_item(b"")

    with patch.object(api.session, "request", return_value=make_response(500, text="boom")):
        with pytest.raises(FolderSyncServerError, match="500"):
            api.upload_item(b"")

    with patch.object(api.session, "request",
                      return_value=make_response(422, json_data={"message": "Invalid mime type"})):
        with pytest.raises(FolderSyncServerError, match="Invalid mime type"):
            api.upload_item(b"")


def test_transport_errors_become_server_errors():
    api = make_api()

    with patch.object(api.session, "request", side_effect=requests.exceptions.ConnectionError("refused")):
        with pytest.raises(FolderSyncServerError, match="Cannot connect"):
            api.upload_item(b"")

    with patch.object(api.session, "request", side_effect=requests.exceptions.Timeout()):
        with pytest.raises(FolderSyncServerError, match="timed out"):
            api.upload_item(b"")


def test_list_uploads_encodes_folder_ids():
    api = make_api()
    listing = [{
        "id": 3,
        "uuid": UPLOAD_UUID,
        "imageFiles": [{
            "id": 11,
            "folder": {"id": 1, "name": "Holidays", "folder": "2024", "subfolder": None},
            "fileName": "beach.jpg",
            "fileUrl": "http://127.0.0.1:3002/files/beach.jpg",
            "thumbUrl": "http://127.0.0.1:3002/thumbs/beach.jpg",
            "mimeType": "image/jpeg",
            "width": 640,
            "height": 480
        }],
        "pdfFiles": [],
        "audioFiles": [{
            "id": 12,
            "folder": {"id": 2, "name": "Music"},
            "fileName": "song.flac",
            "fileUrl": "http://127.0.0.1:3002/files/song.flac",
            "length": 182.5,
            "bitrate": 1411
        }],
        "textFiles": []
    }]

    with patch.object(api.session, "request", return_value=make_response(json_data=listing)) as request:
        uploads = api.list_uploads([1, 2, 3])

    assert request.call_args.args == ("GET", "http://127.0.0.1:3002/uploads")
    assert request.call_args.kwargs["params"] == {"folderIds": "MSwyLDM="}

    upload = uploads[0]
    assert str(upload.uuid) == UPLOAD_UUID
    assert upload.image_files[0].file_name == "beach.jpg"
    assert upload.image_files[0].folder.name == "Holidays"
    assert upload.audio_files[0].bitrate == 1411
    assert upload.video_files == []


def test_list_uploads_rejects_bad_payload():
    api = make_api()

    with patch.object(api.session, "request", return_value=make_response(json_data={"error": "nope"})):
        with pytest.raises(FolderSyncDecodeError):
            api.list_uploads([1])


def test_list_uploads_by_uuid_posts_compressed_uuids():
    api = make_api()

    with patch.object(api.session, "request", return_value=make_response(json_data=[])) as request:
        assert api.list_uploads_by_uuid([UPLOAD_UUID]) == []

    assert request.call_args.args == ("POST", "http://127.0.0.1:3002/uploads/list")
    assert sent_json(request.call_args) == {"uuids": [UPLOAD_UUID]}


def test_login_success_and_failure():
    api = make_api()
    user_json = {"user": {"id": 5, "firstName": "Ada", "lastName": "L", "emailAddress": "ada@example.com"}}

    with patch.object(api.session, "request", return_value=make_response(json_data=user_json)) as request:
        account = api.login("ada@example.com", "secret")

    assert account.user.first_name == "Ada"
    assert api.user.email_address == "ada@example.com"
    assert request.call_args.args == ("POST", "http://127.0.0.1:3002/session")
    assert sent_json(request.call_args) == {"emailAddress": "ada@example.com", "password": "secret"}

    rejected = {"errors": ["Invalid email or password"]}
    with patch.object(api.session, "request", return_value=make_response(json_data=rejected)):
        with pytest.raises(FolderSyncAuthError, match="Invalid email or password"):
            api.login("ada@example.com", "wrong")


def test_register_sends_camel_case_user():
    api = make_api()
    response = {"user": {"id": 9, "emailAddress": "bob@example.com"}, "message": "Welcome"}

    with patch.object(api.session, "request", return_value=make_response(json_data=response)) as request:
        account = api.register(User(first_name="Bob", email_address="bob@example.com"))

    assert account.message == "Welcome"
    assert sent_json(request.call_args) == {"firstName": "Bob", "emailAddress": "bob@example.com"}


def test_change_password_requires_login():
    api = make_api()

    with pytest.raises(FolderSyncAuthError):
        api.change_password("old", "new")


def test_publish_and_unpublish():
    api = make_api()

    with patch.object(api.session, "request", return_value=make_response(json_data={"success": True})) as request:
        api.publish_folders([4, 5])
        api.unpublish_folders([4])

    first, second = request.call_args_list
    assert first.args == ("POST", "http://127.0.0.1:3002/folders/publish")
    assert first.kwargs["json"] == {"id": [4, 5]}
    assert second.args == ("POST", "http://127.0.0.1:3002/folders/unpublish")
    assert second.kwargs["json"] == {"id": [4]}


def test_streaming_status():
    api = make_api()

    with patch.object(api.session, "request",
                      return_value=make_response(json_data={"id": 8, "m3u8Exists": True})) as request:
        status = api.get_streaming_status("video", 8)

    assert status.id == 8
    assert status.m3u8_exists is True
    assert request.call_args.args == ("GET", "http://127.0.0.1:3002/video_files/8.json")

    with pytest.raises(ValueError):
        api.get_streaming_status("image", 8)
