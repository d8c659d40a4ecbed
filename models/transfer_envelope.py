"""
FolderSync Client - Transfer Envelope Model

Pydantic model for the unit of upload sent to the ingestion endpoint.
"""

import base64
import uuid as uuid_lib
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from .crawl_state import Provenance


class TransferEnvelope(BaseModel):
    """
    One file packaged for transmission.

    The uuid is minted client-side and expected to be echoed back in the
    server's acknowledgement. Raw bytes travel base64-encoded.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    uuid: UUID = Field(default_factory=uuid_lib.uuid4)
    file_path: str
    mime_type: str = Field(min_length=1)
    source: Provenance
    item_data: bytes
    created_at: str
    updated_at: str

    @field_serializer('item_data')
    def serialize_item_data(self, value: bytes) -> str:
        return base64.b64encode(value).decode('ascii')

    def to_json_bytes(self) -> bytes:
        """Serialize to the camelCase JSON body expected by the server."""
        return self.model_dump_json(by_alias=True).encode('utf-8')
