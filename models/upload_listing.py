"""
FolderSync Client - Upload Listing Models

Pydantic models for records returned by the uploads list endpoint. Each
upload groups the files the server extracted from it by category.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ListingModel(BaseModel):
    """Base for listing records: camelCase on the wire, unknown keys ignored"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')


class Folder(ListingModel):
    """Folder descriptor embedded in every file record"""
    id: int
    name: str
    folder: Optional[str] = None
    subfolder: Optional[str] = None


class UploadedFile(ListingModel):
    """Fields shared by every file category"""
    id: int
    folder: Folder
    file_name: str
    file_url: str
    data_url: Optional[str] = None
    mime_type: Optional[str] = None


class ImageFile(UploadedFile):
    thumb_url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class PdfFile(UploadedFile):
    pass


class TextFile(UploadedFile):
    pass


class AudioFile(UploadedFile):
    format: Optional[str] = None
    length: Optional[float] = None
    bitrate: Optional[int] = None


class VideoFile(UploadedFile):
    format: Optional[str] = None
    length: Optional[float] = None
    bitrate: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None


class UploadWithFiles(ListingModel):
    """One upload record with its per-category file lists"""
    id: int
    uuid: UUID
    image_files: List[ImageFile] = Field(default_factory=list)
    pdf_files: List[PdfFile] = Field(default_factory=list)
    audio_files: List[AudioFile] = Field(default_factory=list)
    video_files: List[VideoFile] = Field(default_factory=list)
    text_files: List[TextFile] = Field(default_factory=list)
