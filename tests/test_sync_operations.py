"""
Tests for the sync coordinator in FolderSync Client

Runs full sync passes over temporary folder trees against an in-memory API.
"""

import asyncio
import gzip
import json
import sys
import tempfile
import threading
import time
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from exceptions import FolderSyncServerError
from models import Root, RootState
from operations import SyncContext, SyncCoordinator


class RecordingAPI:
    """Acknowledges every upload; fails those whose path contains fail_marker"""

    def __init__(self, fail_marker: str = None, delay: float = 0.0):
        self.bodies = []
        self.fail_marker = fail_marker
        self.delay = delay
        self._lock = threading.Lock()

    def upload_item(self, compressed_body: bytes):
        if self.delay:
            time.sleep(self.delay)
        body = json.loads(gzip.decompress(compressed_body))
        with self._lock:
            self.bodies.append(body)
            ack_id = len(self.bodies)
        if self.fail_marker and self.fail_marker in body["filePath"]:
            raise FolderSyncServerError("Request failed with status 422")
        return {"id": ack_id, "uuid": body["uuid"]}

    def uploaded(self):
        return sorted((Path(b["filePath"]).name, b["mimeType"], b["source"]) for b in self.bodies)


def make_tree(base: Path, relative_paths):
    for relative in relative_paths:
        path = base / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(relative)


def run_sync(coordinator, roots=None, progress_callback=None):
    async def go():
        await coordinator.sync_all(roots, progress_callback)
        await coordinator.drain()
    asyncio.run(go())


def test_clear_then_empty_sync():
    api = RecordingAPI()
    coordinator = SyncCoordinator(SyncContext(api))
    coordinator.add_root("/somewhere")

    coordinator.clear()
    run_sync(coordinator, [])

    assert coordinator.progress == 0
    assert coordinator.uploads_started == 0
    assert coordinator.roots == []
    assert api.bodies == []


def test_only_importable_files_are_uploaded():
    """Test a.txt and b.jpg upload while c.unknownext is skipped"""
    with tempfile.TemporaryDirectory() as temp_dir:
        base = Path(temp_dir)
        make_tree(base, ["a.txt", "b.jpg", "c.unknownext"])

        api = RecordingAPI()
        coordinator = SyncCoordinator(SyncContext(api))
        run_sync(coordinator, [base])

        assert api.uploaded() == [
            ("a.txt", "text/plain", "root"),
            ("b.jpg", "image/jpeg", "root"),
        ]
        assert coordinator.uploads_started == 2
        assert len(coordinator.tracker.snapshot()) == 2
        assert coordinator.tracker.pending() == []


def test_provenance_and_depth_cap():
    with tempfile.TemporaryDirectory() as temp_dir:
        base = Path(temp_dir)
        make_tree(base, [
            "cover.jpg",
            "Album/notes.md",
            "Album/Disc 1/01.flac",
            "Album/Disc 1/extra/file.txt",
            "Album/.DS_Store",
        ])

        api = RecordingAPI()
        coordinator = SyncCoordinator(SyncContext(api))
        run_sync(coordinator, [base])

        assert api.uploaded() == [
            ("01.flac", "audio/flac", "subfolder"),
            ("cover.jpg", "image/jpeg", "root"),
            ("notes.md", "text/markdown", "folder"),
        ]


def test_progress_is_root_granular_and_monotonic():
    with tempfile.TemporaryDirectory() as temp_dir:
        base = Path(temp_dir)
        roots = []
        for name in ("one", "two", "three"):
            make_tree(base / name, ["file.txt"])
            roots.append(base / name)

        coordinator = SyncCoordinator(SyncContext(RecordingAPI()))
        seen = []

        def callback(message, current, total):
            seen.append((current, total, coordinator.progress))

        run_sync(coordinator, roots, callback)

        assert seen[0] == (0, 3, 0.0)
        assert [(c, t) for c, t, _ in seen[1:]] == [(1, 3), (2, 3), (3, 3)]
        progress_values = [p for _, _, p in seen[1:]]
        assert progress_values == [1 / 3, 2 / 3, 1.0]
        assert progress_values == sorted(progress_values)
        assert coordinator.progress == 1.0


def test_access_grants_released_once_per_root():
    with tempfile.TemporaryDirectory() as temp_dir:
        base = Path(temp_dir)
        make_tree(base / "good", ["a.txt"])
        make_tree(base, ["plain-file.txt"])

        released = []
        roots = [
            Root(base / "good", lambda: released.append("good")),
            Root(base / "missing", lambda: released.append("missing")),
            Root(base / "plain-file.txt", lambda: released.append("file")),
        ]

        api = RecordingAPI()
        coordinator = SyncCoordinator(SyncContext(api))
        run_sync(coordinator, roots)
        # A second release is a no-op
        for root in roots:
            root.release()

        assert released == ["good", "missing", "file"]
        assert coordinator.root_states() == [RootState.RELEASED] * 3
        assert api.uploaded() == [("a.txt", "text/plain", "root")]
        assert coordinator.progress == 1.0


def test_failed_uploads_do_not_stop_the_pass():
    with tempfile.TemporaryDirectory() as temp_dir:
        base = Path(temp_dir)
        make_tree(base, ["bad.txt", "good.txt", "folder/also-good.pdf"])

        api = RecordingAPI(fail_marker="bad")
        coordinator = SyncCoordinator(SyncContext(api, max_concurrent_uploads=1))
        run_sync(coordinator, [base])

        assert len(api.bodies) == 3
        assert coordinator.uploads_started == 3
        assert len(coordinator.tracker.snapshot()) == 2
        assert coordinator.transport.failed_count == 1
        assert coordinator.in_flight == 0


def test_sync_all_defaults_to_working_set():
    with tempfile.TemporaryDirectory() as temp_dir:
        base = Path(temp_dir)
        make_tree(base / "first", ["a.txt"])
        make_tree(base / "second", ["b.txt"])

        api = RecordingAPI()
        coordinator = SyncCoordinator(SyncContext(api))
        coordinator.add_root(base / "first")
        coordinator.add_root(str(base / "second"))
        run_sync(coordinator)

        assert api.uploaded() == [("a.txt", "text/plain", "root"), ("b.txt", "text/plain", "root")]
        assert coordinator.root_states() == [RootState.RELEASED, RootState.RELEASED]


def test_identical_files_are_uploaded_each_time():
    with tempfile.TemporaryDirectory() as temp_dir:
        base = Path(temp_dir)
        make_tree(base, ["a.txt"])

        api = RecordingAPI()
        coordinator = SyncCoordinator(SyncContext(api))
        run_sync(coordinator, [base])
        run_sync(coordinator, [base])

        assert len(api.bodies) == 2
        assert api.bodies[0]["uuid"] != api.bodies[1]["uuid"]


def test_second_pass_restarts_progress_and_replaces_working_set():
    with tempfile.TemporaryDirectory() as temp_dir:
        base = Path(temp_dir)
        roots = []
        for name in ("one", "two"):
            make_tree(base / name, ["file.txt"])
            roots.append(base / name)

        coordinator = SyncCoordinator(SyncContext(RecordingAPI()))
        run_sync(coordinator, roots)

        seen = []
        run_sync(coordinator, roots, lambda message, current, total: seen.append(coordinator.progress))

        assert seen == [0.0, 0.5, 1.0]
        assert len(coordinator.roots) == 2
        assert coordinator.root_states() == [RootState.RELEASED, RootState.RELEASED]


def test_coordinator_reused_across_event_loops():
    """Test that a second asyncio.run pass can still wait for upload slots"""
    with tempfile.TemporaryDirectory() as temp_dir:
        base = Path(temp_dir)
        make_tree(base, [f"{i}.txt" for i in range(6)])

        api = RecordingAPI(delay=0.02)
        coordinator = SyncCoordinator(SyncContext(api, max_concurrent_uploads=1))
        run_sync(coordinator, [base])
        run_sync(coordinator, [base])

        assert len(api.bodies) == 12
        assert len(coordinator.tracker.snapshot()) == 12
        assert coordinator.uploads_started == 12
