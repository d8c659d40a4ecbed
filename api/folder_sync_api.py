"""
FolderSync Client - API Communication Module

Handles all communication with the FolderSync server via REST API.
Every JSON body is sent gzip-compressed; the session keeps the login cookie.

Author: FolderSync Project
"""

import base64
import logging
import requests
from typing import Optional, Any, List, Iterable, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel, TypeAdapter, ValidationError

from exceptions import (
    FolderSyncAuthError,
    FolderSyncServerError,
    FolderSyncDecodeError
)
from models import AccountResponse, StreamingStatus, UploadWithFiles, User

from .payload_encoding import compress_payload, encode_json, upload_headers

# Configure logging
logger = logging.getLogger(__name__)

ModelT = TypeVar('ModelT', bound=BaseModel)

STREAMING_KINDS = {
    "video": "/video_files",
    "audio": "/audio_files"
}

_upload_list_adapter = TypeAdapter(List[UploadWithFiles])


class FolderSyncAPI:
    """
    API client for communicating with the FolderSync server.

    Responsibilities:
    - Send compressed upload bodies to the ingestion endpoint
    - Query the uploads list endpoint
    - Manage the account session (registration, login, logout, password)
    - Publish/unpublish folders and poll streaming status
    - Translate transport failures and error statuses into exceptions
    """

    def __init__(self, server_url: str, server_port: int, uploads_endpoint: str = "/uploads",
                 verify_ssl: bool = True, timeout: float = 30):
        """
        Initialize API client.

        Args:
            server_url: Base URL of server (e.g., "http://127.0.0.1")
            server_port: Server port number (e.g., 3002)
            uploads_endpoint: Path of the ingestion endpoint
            verify_ssl: Whether to verify SSL certificates
            timeout: Per-request timeout in seconds
        """
        self.base_url = f"{server_url}:{server_port}"
        self.uploads_endpoint = uploads_endpoint
        self.verify_ssl = verify_ssl
        self.timeout = timeout
        self.user: Optional[User] = None
        # Use session for connection pooling and to carry the session cookie
        self.session = requests.Session()
        logger.debug(f"Initialized API client for {self.base_url} (SSL verification: {self.verify_ssl})")

    @classmethod
    def from_config(cls, config_manager) -> 'FolderSyncAPI':
        """Build a client from ConfigManager settings."""
        return cls(
            config_manager.get("server_url"),
            config_manager.get("server_port"),
            uploads_endpoint=config_manager.get("uploads_endpoint", "/uploads"),
            verify_ssl=config_manager.get("verify_ssl", True),
            timeout=config_manager.get("request_timeout", 30)
        )

    @property
    def uploads_url(self) -> str:
        return f"{self.base_url}{self.uploads_endpoint}"

    def close(self):
        """
        Close the session and release resources.

        Should be called when done using the API client.
        """
        if hasattr(self, 'session') and self.session:
            self.session.close()
            logger.debug("API client session closed")

    def _make_request(self, method: str, endpoint: str, **kwargs) -> Any:
        """
        Make an API request.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (e.g., "/uploads")
            **kwargs: Additional arguments for request

        Returns:
            Response data (parsed JSON or raw data)

        Raises:
            FolderSyncAuthError: If the session is missing or rejected
            FolderSyncServerError: If a transport or server error occurs
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"API request: {method} {endpoint}")

        if "verify" not in kwargs:
            kwargs["verify"] = self.verify_ssl
        if "timeout" not in kwargs:
            kwargs["timeout"] = self.timeout

        try:
            response = self.session.request(method, url, **kwargs)

            if response.status_code == 401:
                self.user = None
                logger.warning("Session missing or expired")
                raise FolderSyncAuthError("Not logged in or session expired - please login again")

            if response.status_code >= 500:
                logger.error(f"Server error {response.status_code}: {response.text}")
                raise FolderSyncServerError(f"Server error {response.status_code}: {response.text}")

            if response.status_code >= 400:
                error_message = response.text
                try:
                    error_data = response.json()
                    if isinstance(error_data, dict):
                        error_message = error_data.get("message", error_message)
                except ValueError:
                    pass
                logger.error(f"Request failed with status {response.status_code}: {error_message}")
                raise FolderSyncServerError(f"Request failed with status {response.status_code}: {error_message}")

            # Try to parse JSON response
            try:
                return response.json()
            except ValueError:
                # Return raw content if not JSON
                return response.content

        except requests.exceptions.ConnectionError as e:
            logger.error(f"Cannot connect to server at {self.base_url}: {e}")
            raise FolderSyncServerError(f"Cannot connect to server at {self.base_url}")
        except requests.exceptions.Timeout:
            logger.error("Request timed out")
            raise FolderSyncServerError("Request timed out")
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error: {str(e)}")
            raise FolderSyncServerError(f"Request error: {str(e)}")

    def _send_compressed(self, method: str, endpoint: str, compressed_body: bytes) -> Any:
        """Send an already gzip-compressed JSON body."""
        return self._make_request(
            method,
            endpoint,
            data=compressed_body,
            headers=upload_headers(len(compressed_body))
        )

    def _send_json(self, method: str, endpoint: str, payload: Any) -> Any:
        """Serialize, compress and send a JSON payload."""
        return self._send_compressed(method, endpoint, compress_payload(encode_json(payload)))

    @staticmethod
    def _decode(model: Type[ModelT], data: Any, what: str) -> ModelT:
        """
        Validate a response body against a model.

        Raises:
            FolderSyncDecodeError: If the body does not match the model
        """
        try:
            if isinstance(data, (bytes, str)):
                return model.model_validate_json(data)
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Cannot decode {what} response: {e}")
            raise FolderSyncDecodeError(f"Cannot decode {what} response: {e}")

    # ==================== Upload Endpoints ====================

    def upload_item(self, compressed_body: bytes) -> Any:
        """
        Send one compressed transfer envelope to the ingestion endpoint.

        Args:
            compressed_body: Gzip-compressed JSON envelope

        Returns:
            Raw response data (decoded by the caller)

        Raises:
            FolderSyncServerError: If the request fails
        """
        return self._send_compressed("POST", self.uploads_endpoint, compressed_body)

    def list_uploads(self, folder_ids: Iterable[int]) -> List[UploadWithFiles]:
        """
        List uploads belonging to the given folders.

        Args:
            folder_ids: Server folder ids

        Returns:
            Upload records with their per-category files

        Raises:
            FolderSyncServerError: If the request fails
            FolderSyncDecodeError: If the response is not a list of uploads
        """
        joined = ",".join(str(folder_id) for folder_id in folder_ids)
        params = {"folderIds": base64.b64encode(joined.encode('utf-8')).decode('ascii')}
        data = self._make_request("GET", self.uploads_endpoint, params=params)
        return self._decode_upload_list(data)

    def list_uploads_by_uuid(self, uuids: Iterable[UUID]) -> List[UploadWithFiles]:
        """
        List uploads by the uuids minted for them (older list endpoint).

        Args:
            uuids: Correlation uuids of previously sent envelopes

        Returns:
            Upload records with their per-category files
        """
        payload = {"uuids": [str(u) for u in uuids]}
        data = self._send_json("POST", f"{self.uploads_endpoint}/list", payload)
        return self._decode_upload_list(data)

    @staticmethod
    def _decode_upload_list(data: Any) -> List[UploadWithFiles]:
        try:
            if isinstance(data, (bytes, str)):
                return _upload_list_adapter.validate_json(data)
            return _upload_list_adapter.validate_python(data)
        except ValidationError as e:
            logger.error(f"Cannot decode uploads list response: {e}")
            raise FolderSyncDecodeError(f"Cannot decode uploads list response: {e}")

    # ==================== Account Endpoints ====================

    def register(self, user: User) -> AccountResponse:
        """
        Register a new account.

        Args:
            user: First name, last name and email address

        Returns:
            AccountResponse with the created user or validation errors
        """
        payload = user.model_dump(by_alias=True, exclude_none=True)
        data = self._send_json("POST", "/registration", payload)
        return self._decode(AccountResponse, data, "registration")

    def login(self, email_address: str, password: str) -> AccountResponse:
        """
        Open a session on the server.

        Args:
            email_address: Account email
            password: Account password

        Returns:
            AccountResponse for the logged in user

        Raises:
            FolderSyncAuthError: If the credentials are rejected
            FolderSyncServerError: If server error occurs
        """
        logger.info(f"Attempting login for user: {email_address}")
        payload = {"emailAddress": email_address, "password": password}
        data = self._send_json("POST", "/session", payload)
        account = self._decode(AccountResponse, data, "session")

        if account.user is None:
            reason = account.message or "; ".join(account.errors) or "Invalid email address or password"
            logger.warning(f"Login failed for user {email_address}: {reason}")
            raise FolderSyncAuthError(reason)

        self.user = account.user
        logger.info(f"Login successful for user: {email_address}")
        return account

    def logout(self) -> Any:
        """Close the server session."""
        data = self._make_request("DELETE", "/session")
        self.user = None
        logger.info("Logged out")
        return data

    def request_password_reset(self, email_address: str) -> AccountResponse:
        """Ask the server to send a password reset message."""
        data = self._send_json("POST", "/password", {"emailAddress": email_address})
        return self._decode(AccountResponse, data, "password reset")

    def change_password(self, current_password: str, new_password: str) -> AccountResponse:
        """
        Change the logged in user's password.

        Raises:
            FolderSyncAuthError: If not logged in
        """
        if self.user is None:
            raise FolderSyncAuthError("Must be logged in to change password")

        payload = {"currentPassword": current_password, "password": new_password}
        data = self._send_json("PUT", "/password", payload)
        return self._decode(AccountResponse, data, "password change")

    def update_account(self, user: User) -> AccountResponse:
        """Update the logged in user's profile."""
        if self.user is None:
            raise FolderSyncAuthError("Must be logged in to update account")

        payload = user.model_dump(by_alias=True, exclude_none=True)
        data = self._send_json("PUT", "/account", payload)
        account = self._decode(AccountResponse, data, "account")
        if account.user is not None:
            self.user = account.user
        return account

    # ==================== Folder Endpoints ====================

    def publish_folders(self, folder_ids: List[int]) -> Any:
        """Publish folders by server id."""
        return self._make_request("POST", "/folders/publish", json={"id": list(folder_ids)})

    def unpublish_folders(self, folder_ids: List[int]) -> Any:
        """Unpublish folders by server id."""
        return self._make_request("POST", "/folders/unpublish", json={"id": list(folder_ids)})

    # ==================== Streaming Endpoints ====================

    def get_streaming_status(self, kind: str, file_id: int) -> StreamingStatus:
        """
        Check whether the HLS playlist for a media file exists.

        Args:
            kind: "video" or "audio"
            file_id: Server id of the media file

        Returns:
            StreamingStatus

        Raises:
            ValueError: If kind is not video or audio
        """
        if kind not in STREAMING_KINDS:
            raise ValueError(f"Unknown streaming kind: {kind}")

        data = self._make_request("GET", f"{STREAMING_KINDS[kind]}/{file_id}.json")
        return self._decode(StreamingStatus, data, f"{kind} streaming status")
