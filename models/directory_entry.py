"""
FolderSync Client - Directory Entry Models

Transient records produced while enumerating a root folder.

Author: FolderSync Project
"""

from datetime import datetime
from pathlib import Path

from .crawl_state import EntryKind, Provenance


class DirectoryEntry:
    """
    One stat-ed entry inside a directory.

    Never persisted; the walker consumes it immediately.
    """

    def __init__(self, name: str, kind: EntryKind, created_at: datetime, modified_at: datetime):
        self.name = name
        self.kind = kind
        self.created_at = created_at
        self.modified_at = modified_at

    @property
    def is_file(self) -> bool:
        return self.kind == EntryKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind == EntryKind.DIRECTORY

    def __repr__(self):
        return f"DirectoryEntry({self.name!r}, {self.kind.value})"


class WalkedFile:
    """A regular file yielded by the walker, tagged with its crawl depth."""

    def __init__(self, entry: DirectoryEntry, path: Path, provenance: Provenance):
        self.entry = entry
        self.path = path
        self.provenance = provenance

    def __repr__(self):
        return f"WalkedFile({str(self.path)!r}, {self.provenance.value})"
