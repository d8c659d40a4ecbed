"""
FolderSync Client - MIME Type Table

Maps lowercase file extensions to MIME types. A file is importable if and
only if its extension resolves through this table.
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)


DEFAULT_MIME_TYPES: Mapping[str, str] = MappingProxyType({
    # Documents
    "pdf": "application/pdf",
    "md": "text/markdown",
    "txt": "text/plain",

    # JPEG
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",

    # FLAC
    "flac": "audio/flac",

    # MP3
    "mp3": "audio/mpeg",

    # AAC / ALAC
    "aac": "audio/m4a",
    "m4a": "audio/x-m4a",

    # AIFF
    "aff": "audio/x-aiff",
    "aif": "audio/x-aiff",
    "aiff": "audio/x-aiff",

    # WAV
    "wav": "audio/wav",

    # Video (mp4 is always classified as video here; audio-only mp4 is
    # reclassified by the server)
    "mkv": "video/x-matroska",
    "mp4": "video/mp4",
})


class MimeTable:
    """
    Read-only extension -> MIME type lookup.

    Lookups are case-insensitive and tolerate a leading dot.
    """

    def __init__(self, mapping: Optional[Dict[str, str]] = None):
        source = DEFAULT_MIME_TYPES if mapping is None else mapping
        self._types: Mapping[str, str] = MappingProxyType(
            {self.normalize(ext): mime.lower() for ext, mime in source.items()}
        )

    @staticmethod
    def normalize(extension: str) -> str:
        return extension.strip().lstrip('.').lower()

    def resolve(self, extension: str) -> Optional[str]:
        """
        Resolve an extension to its MIME type.

        Args:
            extension: Extension with or without the leading dot

        Returns:
            Lowercase MIME type, or None if the extension is not importable
        """
        if not extension:
            return None
        return self._types.get(self.normalize(extension))

    def resolve_path(self, path: Union[str, Path]) -> Optional[str]:
        """Resolve the MIME type of a file from its path's extension."""
        suffix = Path(path).suffix
        if not suffix:
            return None
        return self.resolve(suffix)

    def is_importable(self, path: Union[str, Path]) -> bool:
        return self.resolve_path(path) is not None

    def extensions(self) -> List[str]:
        return sorted(self._types)

    def __len__(self):
        return len(self._types)
