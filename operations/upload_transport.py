"""
FolderSync Client - Upload Transport

Encodes a transfer envelope (JSON, then gzip) and posts it to the ingestion
endpoint. Each envelope gets exactly one attempt; every failure is logged
and the envelope is dropped.

Author: FolderSync Project
"""

import asyncio
import logging
import zlib
from typing import Any, Optional

from pydantic import ValidationError

from api import compress_payload
from exceptions import FolderSyncAPIError
from models import TransferEnvelope, UploadAck

logger = logging.getLogger(__name__)


class UploadTransport:
    """
    Sends envelopes with bounded concurrency.

    The blocking HTTP call runs in a worker thread. At most
    context.max_concurrent_uploads envelopes are in flight; callers that
    manage the slot themselves (see SyncCoordinator) use transmit().
    """

    def __init__(self, context):
        self.api = context.api
        self.tracker = context.tracker
        self.max_concurrent_uploads = context.max_concurrent_uploads
        self.sent_count = 0
        self.failed_count = 0
        self._slots: Optional[asyncio.Semaphore] = None
        self._slots_loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def slots(self) -> asyncio.Semaphore:
        """
        Upload slots for the running event loop.

        A semaphore is bound to the loop it first waits on, so a fresh one is
        made whenever the transport is used from a new loop.
        """
        loop = asyncio.get_running_loop()
        if self._slots is None or self._slots_loop is not loop:
            self._slots = asyncio.Semaphore(self.max_concurrent_uploads)
            self._slots_loop = loop
        return self._slots

    @staticmethod
    def encode(envelope: TransferEnvelope) -> bytes:
        """Serialize and compress an envelope into a request body."""
        return compress_payload(envelope.to_json_bytes())

    async def send(self, envelope: TransferEnvelope) -> Optional[UploadAck]:
        """
        Upload one envelope, waiting for a free slot first.

        Returns:
            The decoded acknowledgement, or None if the upload failed
        """
        async with self.slots:
            return await self.transmit(envelope)

    async def transmit(self, envelope: TransferEnvelope) -> Optional[UploadAck]:
        """
        Upload one envelope without taking a slot.

        Returns:
            The decoded acknowledgement, or None if the upload failed
        """
        try:
            body = await asyncio.to_thread(self.encode, envelope)
        except (ValueError, TypeError, zlib.error) as e:
            logger.error(f"Cannot encode {envelope.file_path}: {e}")
            self.failed_count += 1
            return None

        self.tracker.expect(envelope)
        self.sent_count += 1
        logger.debug(f"Uploading {envelope.file_path} ({len(body)} bytes compressed)")

        try:
            response_data = await asyncio.to_thread(self.api.upload_item, body)
        except FolderSyncAPIError as e:
            logger.error(f"Upload failed for {envelope.file_path}: {e}")
            self.failed_count += 1
            return None

        ack = self.decode_ack(response_data)
        if ack is None:
            logger.error(f"Cannot decode upload response for {envelope.file_path}")
            return None

        self.tracker.record(ack)
        return ack

    @staticmethod
    def decode_ack(response_data: Any) -> Optional[UploadAck]:
        try:
            if isinstance(response_data, (bytes, str)):
                return UploadAck.model_validate_json(response_data)
            return UploadAck.model_validate(response_data)
        except ValidationError as e:
            logger.debug(f"Invalid upload response: {e}")
            return None
