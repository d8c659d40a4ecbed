"""
FolderSync Client - Upload Catalog

Keeps the latest uploads listing from the server, flattened into one list
per file category.

Author: FolderSync Project
"""

import logging
from typing import Dict, Iterable, List

from models import UploadWithFiles

logger = logging.getLogger(__name__)


CATEGORIES = ("image", "pdf", "audio", "video", "text")


class UploadCatalog:
    """Per-category view over the uploads returned by the list endpoints."""

    def __init__(self):
        self.uploads: List[UploadWithFiles] = []
        self.files: Dict[str, list] = {category: [] for category in CATEGORIES}

    def set_uploads(self, results: List[UploadWithFiles]):
        """
        Replace the catalog with a fresh listing.

        Args:
            results: Upload records from the server
        """
        self.uploads = list(results)
        self.files = {category: [] for category in CATEGORIES}

        for upload in self.uploads:
            for category in CATEGORIES:
                self.files[category].extend(getattr(upload, f"{category}_files"))

        logger.info(f"Catalog holds {len(self.uploads)} upload(s): {self.counts()}")

    def refresh(self, api, folder_ids: Iterable[int]):
        """Reload the catalog for the given server folders."""
        self.set_uploads(api.list_uploads(folder_ids))

    def refresh_from_tracker(self, api, tracker):
        """Reload the catalog for every upload acknowledged so far."""
        self.set_uploads(api.list_uploads_by_uuid(tracker.uuids()))

    def counts(self) -> Dict[str, int]:
        return {category: len(files) for category, files in self.files.items()}
