"""
FolderSync Client - Sync Operations Module

Implements the sync pass over the selected root folders: walk each root,
build an envelope for every importable file and hand it to the upload
transport. Uploads are not awaited by the walk; drain() is the join point.

Author: FolderSync Project
"""

import asyncio
import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Set, Union

from managers import FolderWalker
from models import Root, RootState, TransferEnvelope, WalkedFile

from .import_item_builder import ImportItemBuilder
from .upload_transport import UploadTransport

# Configure logging
logger = logging.getLogger(__name__)


class SyncCoordinator:
    """
    Orchestrates folder synchronization.

    Responsibilities:
    - Hold the working set of selected root folders
    - Walk roots in the order supplied, releasing each root's access grant
      once its walk finishes (or fails)
    - Schedule one upload per importable file, never more than the
      configured number at a time
    - Report root-level progress via callbacks
    """

    def __init__(self, context):
        """
        Initialize sync coordinator.

        Args:
            context: SyncContext with the API client, tables and tracker
        """
        self.context = context
        self.walker = FolderWalker(context.ignore_list)
        self.builder = ImportItemBuilder(context)
        self.transport = UploadTransport(context)
        self.roots: List[Root] = []
        self.progress: float = 0.0
        self.uploads_started = 0
        self._tasks: Set[asyncio.Task] = set()

    @property
    def tracker(self):
        return self.context.tracker

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def add_root(self, root: Union[Root, str, Path]) -> Root:
        """
        Add a folder to the working set.

        Args:
            root: Root, or a plain path (no access grant)

        Returns:
            The Root that was added
        """
        if not isinstance(root, Root):
            root = Root(root)
        self.roots.append(root)
        logger.debug(f"Added root {root.path}")
        return root

    def root_states(self) -> List[RootState]:
        return [root.state for root in self.roots]

    def clear(self):
        """
        Empty the working set and reset progress.

        Uploads already in flight are not cancelled.
        """
        self.roots = []
        self.progress = 0.0
        logger.info("Cleared root folders")

    async def sync_all(self, roots: Optional[Iterable[Union[Root, str, Path]]] = None,
                       progress_callback: Optional[Callable] = None):
        """
        Walk every root and schedule uploads for its importable files.

        Args:
            roots: Roots to sync; replaces the working set when given,
                   otherwise the current working set is synced
            progress_callback: Optional callback for progress updates
                             Called with (message: str, current: int, total: int)
        """
        if roots is not None:
            self.roots = []
            for root in roots:
                self.add_root(root)
        targets = list(self.roots)
        self.progress = 0.0

        total = len(targets)
        logger.info(f"Starting sync of {total} root folder(s)")

        if progress_callback:
            progress_callback("Starting sync...", 0, total)

        for index, root in enumerate(targets, start=1):
            try:
                await self.sync_root(root)
            except Exception as e:
                logger.exception(f"Sync of {root.path} failed: {e}")

            self.progress = index / total

            if progress_callback:
                progress_callback(f"Synced {root.path}", index, total)

        logger.info(f"Sync pass complete: {self.uploads_started} upload(s) scheduled, {self.in_flight} in flight")

    async def sync_root(self, root: Root):
        """
        Walk one root and schedule its uploads.

        File bytes are read before the root's access grant is released;
        only the network calls outlive the walk.

        Args:
            root: Root to walk
        """
        try:
            entry = await asyncio.to_thread(self.walker.stat_entry, root.path)
            if entry is None:
                logger.error(f"Skipping root that cannot be read: {root.path}")
                return
            if not entry.is_directory:
                logger.error(f"Skipping root that is not a directory: {root.path}")
                return

            root.start_walking()
            walked_files = await asyncio.to_thread(lambda: list(self.walker.walk(root)))
            logger.info(f"Found {len(walked_files)} file(s) under {root.path}")

            for walked in walked_files:
                await self._import(walked)
        finally:
            root.release()

    async def _import(self, walked: WalkedFile):
        # The slot is taken before reading so buffered file bytes stay bounded
        slots = self.transport.slots
        await slots.acquire()
        scheduled = False
        try:
            envelope = await self.builder.build_walked(walked)
            if envelope is not None:
                self._schedule(envelope, slots)
                scheduled = True
        finally:
            if not scheduled:
                slots.release()

    def _schedule(self, envelope: TransferEnvelope, slots: asyncio.Semaphore):
        self.uploads_started += 1
        task = asyncio.create_task(self._upload(envelope, slots))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _upload(self, envelope: TransferEnvelope, slots: asyncio.Semaphore):
        try:
            await self.transport.transmit(envelope)
        finally:
            slots.release()

    async def drain(self):
        """Wait until every scheduled upload has finished."""
        while self._tasks:
            results = await asyncio.gather(*list(self._tasks), return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.error(f"Upload task failed: {result}")
