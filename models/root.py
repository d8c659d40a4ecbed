"""
FolderSync Client - Root Folder Model

A user-selected top-level folder together with the access grant that
allows reading it.

Author: FolderSync Project
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from .crawl_state import RootState

logger = logging.getLogger(__name__)


class Root:
    """
    Access-scoped reference to a user-chosen directory.

    The access grant is an optional callable invoked exactly once when the
    root is released. Platforms without scoped folder access simply pass
    nothing.
    """

    def __init__(self, path: Union[str, Path], release_access: Optional[Callable[[], None]] = None):
        self.path = Path(path).expanduser()
        self.state = RootState.PENDING
        self._release_access = release_access

    def start_walking(self):
        """Mark the root as being traversed."""
        self.state = RootState.WALKING

    def release(self):
        """
        Release the access grant for this root.

        Safe to call more than once; only the first call reaches the grant.
        """
        if self.state == RootState.RELEASED:
            return

        self.state = RootState.RELEASED
        if self._release_access is not None:
            try:
                self._release_access()
            except Exception as e:
                logger.error(f"Failed to release access to {self.path}: {e}")
            self._release_access = None

        logger.debug(f"Released root {self.path}")

    def __repr__(self):
        return f"Root({str(self.path)!r}, state={self.state.value})"
