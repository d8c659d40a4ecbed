"""
FolderSync Client - Models Package

Contains data models and enumerations used by the client.

Author: FolderSync Project
"""

from .crawl_state import Provenance, RootState, EntryKind
from .root import Root
from .directory_entry import DirectoryEntry, WalkedFile
from .transfer_envelope import TransferEnvelope
from .upload_ack import UploadAck
from .upload_listing import (
    Folder,
    ImageFile,
    PdfFile,
    AudioFile,
    VideoFile,
    TextFile,
    UploadWithFiles
)
from .account import User, AccountResponse
from .streaming_status import StreamingStatus

__all__ = [
    'Provenance',
    'RootState',
    'EntryKind',
    'Root',
    'DirectoryEntry',
    'WalkedFile',
    'TransferEnvelope',
    'UploadAck',
    'Folder',
    'ImageFile',
    'PdfFile',
    'AudioFile',
    'VideoFile',
    'TextFile',
    'UploadWithFiles',
    'User',
    'AccountResponse',
    'StreamingStatus'
]
