"""
FolderSync Client - Folder Walker

Enumerates the regular files under a selected root folder, tagging each
with the crawl depth it was found at. Traversal is hard-capped at three
levels (root -> folder -> subfolder); deeper directories are never visited.

Author: FolderSync Project
"""

import logging
import stat
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional

from ignore_patterns import IgnoreList
from models import DirectoryEntry, EntryKind, Provenance, Root, WalkedFile

# Configure logging
logger = logging.getLogger(__name__)


# Provenance tag for each traversal level; its length is the depth cap
LEVELS = (Provenance.ROOT, Provenance.FOLDER, Provenance.SUBFOLDER)


def to_local_datetime(timestamp: float) -> datetime:
    """Convert a POSIX timestamp to an aware datetime in the local zone."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).astimezone()


class FolderWalker:
    """
    Walks a root folder up to the fixed depth cap.

    Responsibilities:
    - List directory entries, dropping ignored OS artifacts
    - Stat each entry and classify it as regular file or directory
    - Recurse into directories until the subfolder level
    - Log and skip entries that cannot be listed or stat-ed
    """

    def __init__(self, ignore_list: Optional[IgnoreList] = None):
        """
        Initialize folder walker.

        Args:
            ignore_list: Names to skip at every level (defaults to OS artifacts)
        """
        self.ignore_list = ignore_list if ignore_list is not None else IgnoreList()

    def walk(self, root: Root) -> Iterator[WalkedFile]:
        """
        Yield every regular file under root within the depth cap.

        Args:
            root: Root folder to traverse

        Yields:
            WalkedFile records tagged root, folder or subfolder
        """
        logger.info(f"Walking root folder: {root.path}")
        yield from self._walk_directory(root.path, 0)

    def _walk_directory(self, directory: Path, level: int) -> Iterator[WalkedFile]:
        provenance = LEVELS[level]

        for name in self.list_directory(directory):
            path = directory / name
            entry = self.stat_entry(path)
            if entry is None:
                continue

            if entry.is_file:
                yield WalkedFile(entry, path, provenance)
            elif entry.is_directory:
                if level + 1 < len(LEVELS):
                    yield from self._walk_directory(path, level + 1)
                else:
                    logger.debug(f"Skipping directory beyond depth cap: {path}")

    def list_directory(self, directory: Path) -> List[str]:
        """
        List entry names in a directory, minus ignored names.

        Args:
            directory: Directory to list

        Returns:
            Sorted entry names, or an empty list if the directory cannot be read
        """
        try:
            names = [child.name for child in directory.iterdir()]
        except OSError as e:
            logger.error(f"Cannot list directory {directory}: {e}")
            return []

        return sorted(self.ignore_list.FilterNames(names))

    def stat_entry(self, path: Path) -> Optional[DirectoryEntry]:
        """
        Stat a path and classify it.

        Symlinks are followed. Anything that is neither a regular file nor a
        directory (sockets, fifos, devices) is skipped.

        Args:
            path: Path to stat

        Returns:
            DirectoryEntry, or None if the entry failed to stat or is not
            a file or directory
        """
        try:
            st = path.stat()
        except OSError as e:
            logger.error(f"Cannot stat {path}: {e}")
            return None

        if stat.S_ISREG(st.st_mode):
            kind = EntryKind.FILE
        elif stat.S_ISDIR(st.st_mode):
            kind = EntryKind.DIRECTORY
        else:
            logger.debug(f"Skipping special file: {path}")
            return None

        # st_birthtime only exists on macOS/BSD (and Windows on 3.12+)
        created = getattr(st, 'st_birthtime', None) or st.st_ctime

        try:
            created_at = to_local_datetime(created)
            modified_at = to_local_datetime(st.st_mtime)
        except (OverflowError, ValueError, OSError) as e:
            logger.error(f"Invalid timestamps on {path}: {e}")
            return None

        return DirectoryEntry(
            name=path.name,
            kind=kind,
            created_at=created_at,
            modified_at=modified_at
        )
