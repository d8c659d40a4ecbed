"""
FolderSync Client - API Error Exception

Base exception class for all API-related errors.

Author: FolderSync Project
"""


class FolderSyncAPIError(Exception):
    """Base exception for API errors."""
    pass
