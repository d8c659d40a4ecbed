"""
FolderSync Client - Authentication Error Exception

Exception raised when the session is missing or rejected by the server.

Author: FolderSync Project
"""

from .api_error import FolderSyncAPIError


class FolderSyncAuthError(FolderSyncAPIError):
    """Exception for authentication errors."""
    pass
