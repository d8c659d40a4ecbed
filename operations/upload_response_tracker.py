"""
FolderSync Client - Upload Response Tracker

Collects server acknowledgements as they arrive. Acks are kept in arrival
order and are never removed or deduplicated.

Author: FolderSync Project
"""

import logging
from typing import Dict, List, Optional
from uuid import UUID

from models import TransferEnvelope, UploadAck

logger = logging.getLogger(__name__)


class UploadResponseTracker:
    """
    Append-only record of upload acknowledgements.

    Envelopes registered with expect() let acks be matched back to the file
    they came from through the uuid the server echoes. A mismatch is logged,
    never rejected.
    """

    def __init__(self):
        self._acks: List[UploadAck] = []
        self._expected: Dict[UUID, str] = {}

    def expect(self, envelope: TransferEnvelope):
        """Remember the uuid minted for an envelope about to be sent."""
        self._expected[envelope.uuid] = envelope.file_path

    def record(self, ack: UploadAck):
        """
        Append an acknowledgement.

        Args:
            ack: Decoded server response
        """
        self._acks.append(ack)

        file_path = self._expected.get(ack.uuid)
        if file_path is None:
            logger.warning(f"Upload id={ack.id} uuid={ack.uuid} does not match any sent file")
        else:
            logger.info(f"Upload id={ack.id} uuid={ack.uuid} path={file_path}")

    def snapshot(self) -> List[UploadAck]:
        """Acks received so far, in arrival order."""
        return list(self._acks)

    def uuids(self) -> List[UUID]:
        return [ack.uuid for ack in self._acks]

    def path_for(self, uuid: UUID) -> Optional[str]:
        """File path of the envelope that was sent with this uuid."""
        return self._expected.get(uuid)

    def pending(self) -> List[UUID]:
        """Uuids sent but not (yet) acknowledged."""
        acked = {ack.uuid for ack in self._acks}
        return [u for u in self._expected if u not in acked]

    def __len__(self):
        return len(self._acks)
