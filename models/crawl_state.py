"""
FolderSync Client - Crawl State Enums

Enumerations describing where a file was discovered and how far a
selected root folder has progressed through a sync pass.

Author: FolderSync Project
"""

from enum import Enum


class Provenance(str, Enum):
    """
    Crawl depth at which a file was discovered.

    The server models exactly organization -> folder -> subfolder, so these
    are the only three slots a file can be classified into.
    """
    ROOT = "root"
    FOLDER = "folder"
    SUBFOLDER = "subfolder"


class RootState(Enum):
    """
    Lifecycle of one root folder during a sync pass.

    States:
    - PENDING: Selected but not yet visited
    - WALKING: Entries are being enumerated and uploads scheduled
    - RELEASED: Traversal finished (or failed) and the access grant was released
    """
    PENDING = "pending"
    WALKING = "walking"
    RELEASED = "released"


class EntryKind(Enum):
    """Kind of a directory entry as reported by stat."""
    FILE = "file"
    DIRECTORY = "directory"
