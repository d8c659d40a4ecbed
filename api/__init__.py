"""
FolderSync Client - API Package

This package contains the API communication class and payload encoding helpers.
"""

from .folder_sync_api import FolderSyncAPI
from .payload_encoding import compress_payload, encode_json, upload_headers

__all__ = ['FolderSyncAPI', 'compress_payload', 'encode_json', 'upload_headers']
