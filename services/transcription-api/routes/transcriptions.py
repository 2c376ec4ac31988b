"""Transcription record endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, HTTPException
from transcription_common.logging import setup_logging

from dependencies import RepositoryDep
from exceptions import TranscriptionPersistenceError
from response_models import MessageResponse, TranscriptionRecord

logger = setup_logging()

router = APIRouter(prefix="/transcriptions", tags=["transcriptions"])


@router.get("", response_model=List[TranscriptionRecord])
def list_transcriptions(repo: RepositoryDep):
    """Returns all transcriptions, newest first."""
    try:
        return repo.list_all()
    except TranscriptionPersistenceError:
        raise HTTPException(status_code=500, detail="Failed to fetch transcriptions")


@router.delete("/{transcription_id}", response_model=MessageResponse)
def delete_transcription(transcription_id: UUID, repo: RepositoryDep):
    """Deletes a transcription. Unknown ids are not an error."""
    try:
        repo.delete(transcription_id)
    except TranscriptionPersistenceError:
        raise HTTPException(status_code=500, detail="Failed to delete transcription")
    return MessageResponse(message="Transcription deleted successfully")
