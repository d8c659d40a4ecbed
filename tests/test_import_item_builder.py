"""
Tests for envelope construction in FolderSync Client
"""

import asyncio
import base64
import json
import sys
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import Provenance
from operations import ImportItemBuilder, SyncContext, format_timestamp

CREATED = datetime(2024, 3, 1, 9, 30, 15, 123456, tzinfo=timezone.utc)
UPDATED = datetime(2024, 3, 2, 18, 0, 0, tzinfo=timezone(timedelta(hours=2)))


def make_builder():
    return ImportItemBuilder(SyncContext(api=None))


def build(builder, path, provenance=Provenance.ROOT):
    return asyncio.run(builder.build(path, CREATED, UPDATED, provenance))


def test_format_timestamp():
    assert format_timestamp(CREATED) == "2024-03-01T09:30:15Z"
    assert format_timestamp(UPDATED) == "2024-03-02T18:00:00+02:00"
    assert format_timestamp(datetime(2024, 1, 1, tzinfo=timezone(timedelta(hours=-5, minutes=-30)))) == \
        "2024-01-01T00:00:00-05:30"


def test_format_timestamp_naive_is_local():
    naive = datetime(2024, 6, 1, 12, 0, 0)

    assert format_timestamp(naive) == format_timestamp(naive.astimezone())


def test_known_and_unknown_types():
    """Test that only importable files produce envelopes"""
    with tempfile.TemporaryDirectory() as temp_dir:
        base = Path(temp_dir)
        (base / "a.txt").write_text("hello")
        (base / "b.jpg").write_bytes(b"\xff\xd8\xff\xe0")
        (base / "c.unknownext").write_text("???")

        builder = make_builder()
        envelopes = [build(builder, base / name) for name in ("a.txt", "b.jpg", "c.unknownext")]

        assert envelopes[0].mime_type == "text/plain"
        assert envelopes[1].mime_type == "image/jpeg"
        assert envelopes[2] is None


def test_unknown_types_never_raise():
    builder = make_builder()

    # The file does not even exist; resolution fails before any read
    for name in ("x.exe", "y", "z.docx", "archive.tar.gz"):
        assert build(builder, f"/nowhere/{name}") is None


def test_unreadable_known_file_is_skipped():
    with tempfile.TemporaryDirectory() as temp_dir:
        assert build(make_builder(), Path(temp_dir) / "missing.pdf") is None


def test_envelope_fields():
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "Track.MP3"
        path.write_bytes(b"ID3\x04\x00")

        builder = make_builder()
        envelope = build(builder, path, Provenance.SUBFOLDER)
        again = build(builder, path, Provenance.SUBFOLDER)

        assert envelope.file_path == str(path)
        assert envelope.mime_type == "audio/mpeg"
        assert envelope.source == Provenance.SUBFOLDER
        assert envelope.item_data == b"ID3\x04\x00"
        assert envelope.created_at == "2024-03-01T09:30:15Z"
        assert envelope.updated_at == "2024-03-02T18:00:00+02:00"
        assert envelope.uuid != again.uuid


def test_envelope_wire_format():
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "doc.pdf"
        path.write_bytes(b"%PDF-1.7")

        envelope = build(make_builder(), path, Provenance.FOLDER)
        wire = json.loads(envelope.to_json_bytes())

        assert set(wire) == {"uuid", "filePath", "mimeType", "source", "itemData", "createdAt", "updatedAt"}
        assert wire["uuid"] == str(envelope.uuid)
        assert wire["source"] == "folder"
        assert wire["mimeType"] == "application/pdf"
        assert base64.b64decode(wire["itemData"]) == b"%PDF-1.7"
