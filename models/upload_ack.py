"""
FolderSync Client - Upload Acknowledgement Model

Pydantic model for the ingestion endpoint's response.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class UploadAck(BaseModel):
    """Server-assigned id plus the echoed correlation uuid"""
    model_config = ConfigDict(frozen=True)

    id: int
    uuid: UUID
