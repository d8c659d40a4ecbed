"""
FolderSync Client - Payload Encoding

Every JSON body sent to the server is gzip-compressed at the highest level
and announced with a fixed set of headers.

Author: FolderSync Project
"""

import gzip
import json
from typing import Any, Dict

COMPRESSION_LEVEL = 9


def encode_json(payload: Any) -> bytes:
    """Serialize a JSON-compatible object to UTF-8 bytes."""
    return json.dumps(payload).encode('utf-8')


def compress_payload(data: bytes) -> bytes:
    """Gzip-compress a serialized body with maximum compression."""
    return gzip.compress(data, compresslevel=COMPRESSION_LEVEL)


def upload_headers(content_length: int) -> Dict[str, str]:
    """
    Headers for a compressed JSON body.

    Args:
        content_length: Length of the compressed body in bytes

    Returns:
        Header dictionary
    """
    return {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "Content-Length": str(content_length),
        "Content-Encoding": "gzip, deflate"
    }
