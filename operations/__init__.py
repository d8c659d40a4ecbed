"""
FolderSync Client - Operations Package

This package contains the crawl, build, upload and catalog operations.
"""

from .sync_context import SyncContext
from .upload_response_tracker import UploadResponseTracker
from .import_item_builder import ImportItemBuilder, format_timestamp
from .upload_transport import UploadTransport
from .sync_operations import SyncCoordinator
from .upload_catalog import UploadCatalog

__all__ = [
    'SyncContext',
    'UploadResponseTracker',
    'ImportItemBuilder',
    'format_timestamp',
    'UploadTransport',
    'SyncCoordinator',
    'UploadCatalog'
]
