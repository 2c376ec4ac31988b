"""Response models for the transcription API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class TranscriptionRecord(BaseModel):
    """A stored transcript."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    transcription: str
    audio_url: str | None = None
    user_id: UUID | None = None
    created_at: datetime


class UploadResponse(BaseModel):
    """Response returned after a single-file upload is transcribed."""

    transcription: str


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class StopRecordingResponse(BaseModel):
    """Response returned once a chunked recording is finalized."""

    mp3: str
    transcription: str
