"""
FolderSync Client - Decode Error Exception

Exception raised when a response body does not match the expected shape.

Author: FolderSync Project
"""

from .api_error import FolderSyncAPIError


class FolderSyncDecodeError(FolderSyncAPIError):
    """Exception for response bodies that cannot be decoded."""
    pass
