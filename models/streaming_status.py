"""
FolderSync Client - Streaming Status Model

Pydantic model for the video/audio streaming status endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field


class StreamingStatus(BaseModel):
    """Whether the HLS playlist for a media file has been produced"""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    m3u8_exists: bool = Field(alias='m3u8Exists')
