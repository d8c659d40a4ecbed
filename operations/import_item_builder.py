"""
FolderSync Client - Import Item Builder

Turns one discovered file into a transfer envelope: resolve its MIME type,
read its bytes and stamp its timestamps. Files with an unknown extension are
skipped without error.

Author: FolderSync Project
"""

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from models import Provenance, TransferEnvelope, WalkedFile

logger = logging.getLogger(__name__)


def format_timestamp(value: datetime) -> str:
    """
    Format a datetime as yyyy-MM-ddTHH:mm:ss followed by the UTC offset.

    The offset is written as +hh:mm, or Z when it is zero. Naive datetimes
    are taken to be local time.
    """
    if value.tzinfo is None:
        value = value.astimezone()
    text = value.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


class ImportItemBuilder:
    """Builds TransferEnvelopes for importable files."""

    def __init__(self, context):
        self.mime_table = context.mime_table

    async def build(self, path: Union[str, Path], created_at: datetime, updated_at: datetime,
                    provenance: Provenance) -> Optional[TransferEnvelope]:
        """
        Build the envelope for a single file.

        The whole file is read into memory; there is no size cap.

        Args:
            path: Absolute path of the file
            created_at: File creation time
            updated_at: File modification time
            provenance: Crawl depth the file was found at

        Returns:
            TransferEnvelope, or None if the file type is unknown or the
            file could not be read
        """
        mime_type = self.mime_table.resolve_path(path)
        if mime_type is None:
            logger.debug(f"Skipping file with unknown type: {path}")
            return None

        try:
            item_data = await asyncio.to_thread(Path(path).read_bytes)
        except OSError as e:
            logger.error(f"Cannot read {path}: {e}")
            return None

        envelope = TransferEnvelope(
            file_path=str(path),
            mime_type=mime_type,
            source=provenance,
            item_data=item_data,
            created_at=format_timestamp(created_at),
            updated_at=format_timestamp(updated_at)
        )
        logger.debug(f"Built envelope {envelope.uuid} for {path} ({mime_type}, {len(item_data)} bytes)")
        return envelope

    async def build_walked(self, walked: WalkedFile) -> Optional[TransferEnvelope]:
        """Build the envelope for a file yielded by the walker."""
        return await self.build(
            walked.path,
            walked.entry.created_at,
            walked.entry.modified_at,
            walked.provenance
        )
