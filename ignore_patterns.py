"""
FolderSync Client - Ignore List

Exact-name filter for filesystem artifacts that should never be crawled.
Names are matched literally (no wildcards). Extra names can be supplied via
the config file or a .foldersyncignore file next to the executable.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set

logger = logging.getLogger(__name__)


IGNORE_FILE_NAME = ".foldersyncignore"

# OS metadata files created by Finder, Explorer and desktop environments
DEFAULT_IGNORED_NAMES = (
    ".DS_Store",
    ".localized",
    "Icon\r",
    "Thumbs.db",
    "desktop.ini",
)


class IgnoreList:
    """
    Matches directory entry names against a fixed set of ignored names

    Supports:
    - Exact names only (case-sensitive)
    - Comments: # prefix (ignored)
    - Blank lines (ignored)
    """

    def __init__(self, names: Optional[Iterable[str]] = None, include_defaults: bool = True):
        """
        Initialize ignore list

        Args:
            names: Additional names to ignore (may include comments and blank lines)
            include_defaults: Whether to start from DEFAULT_IGNORED_NAMES
        """
        self.names: Set[str] = set(DEFAULT_IGNORED_NAMES) if include_defaults else set()
        if names:
            self.names.update(self.ParseNames(names))

    def ParseNames(self, name_lines: Iterable[str]) -> List[str]:
        """
        Parse raw name lines, dropping comments and blank lines

        Args:
            name_lines: Raw name strings

        Returns:
            List of names
        """
        parsed = []

        for line in name_lines:
            # Strip whitespace
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith('#'):
                continue

            parsed.append(line)

        return parsed

    def LoadNamesFromFile(self, file_path: Path) -> List[str]:
        """
        Load additional names from an ignore file and merge them in

        Args:
            file_path: Path to .foldersyncignore file

        Returns:
            List of names read from the file
        """
        if not file_path.exists():
            logger.debug(f"Ignore file not found: {file_path}")
            return []

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                names = self.ParseNames(f.readlines())
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Error reading ignore file {file_path}: {e}")
            return []

        self.names.update(names)
        logger.info(f"Loaded {len(names)} ignored names from {file_path}")
        return names

    def ShouldIgnore(self, name: str) -> bool:
        """
        Check if a directory entry name should be skipped

        Args:
            name: Entry name (not a path)

        Returns:
            bool: True if entry should be ignored
        """
        return name in self.names

    def FilterNames(self, names: Iterable[str]) -> List[str]:
        """
        Filter a list of entry names, removing ignored ones

        Args:
            names: Entry names to filter

        Returns:
            Names that should NOT be ignored
        """
        return [n for n in names if not self.ShouldIgnore(n)]
