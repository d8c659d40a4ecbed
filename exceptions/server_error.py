"""
FolderSync Client - Server Error Exception

Exception raised for transport failures and non-2xx responses.

Author: FolderSync Project
"""

from .api_error import FolderSyncAPIError


class FolderSyncServerError(FolderSyncAPIError):
    """Exception for server errors."""
    pass
