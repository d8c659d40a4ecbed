"""
FolderSync Client - Exceptions Package

Contains all exception classes for the FolderSync client.

Author: FolderSync Project
"""

from .api_error import FolderSyncAPIError
from .auth_error import FolderSyncAuthError
from .server_error import FolderSyncServerError
from .decode_error import FolderSyncDecodeError

__all__ = [
    'FolderSyncAPIError',
    'FolderSyncAuthError',
    'FolderSyncServerError',
    'FolderSyncDecodeError'
]
