"""
FolderSync Client - Sync Context

Bundles the collaborators shared by the crawl and upload components so
each one receives them explicitly instead of reaching for globals.

Author: FolderSync Project
"""

import logging
from typing import Optional

from api import FolderSyncAPI
from ignore_patterns import IGNORE_FILE_NAME, IgnoreList
from managers import ConfigManager
from managers.config_manager import get_base_dir
from mime_types import MimeTable

from .upload_response_tracker import UploadResponseTracker

logger = logging.getLogger(__name__)


class SyncContext:
    """
    Shared state for one client session.

    Attributes:
        api: FolderSyncAPI (or any object with the same upload_item method)
        config: ConfigManager, may be None in tests
        mime_table: Extension -> MIME type table
        ignore_list: Names skipped during the crawl
        tracker: Acks received from the ingestion endpoint
        max_concurrent_uploads: Upper bound on uploads in flight
    """

    def __init__(self, api, config: Optional[ConfigManager] = None,
                 mime_table: Optional[MimeTable] = None,
                 ignore_list: Optional[IgnoreList] = None,
                 tracker: Optional[UploadResponseTracker] = None,
                 max_concurrent_uploads: Optional[int] = None):
        self.api = api
        self.config = config
        self.mime_table = mime_table if mime_table is not None else MimeTable()
        if ignore_list is None:
            extra_names = config.get("ignore_names", []) if config is not None else []
            ignore_list = IgnoreList(extra_names)
        self.ignore_list = ignore_list
        self.tracker = tracker if tracker is not None else UploadResponseTracker()

        if max_concurrent_uploads is None:
            max_concurrent_uploads = config.get_max_concurrent_uploads() if config is not None else 4
        self.max_concurrent_uploads = max(1, max_concurrent_uploads)

    @classmethod
    def from_config(cls, config: ConfigManager) -> 'SyncContext':
        """
        Build a context from loaded configuration.

        Also merges names from the .foldersyncignore file next to the
        executable, if there is one.
        """
        ignore_list = IgnoreList(config.get("ignore_names", []))
        ignore_list.LoadNamesFromFile(get_base_dir() / IGNORE_FILE_NAME)

        return cls(
            FolderSyncAPI.from_config(config),
            config=config,
            ignore_list=ignore_list
        )
