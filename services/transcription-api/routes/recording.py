"""Chunked recording endpoints."""

import asyncio
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, File, Header, HTTPException, UploadFile
from transcription_common.logging import setup_logging

from dependencies import AccumulatorDep, ControllerDep, RegistryDep
from domain import (
    SESSION_ID_PATTERN,
    RecordingSession,
    RecordingSessionController,
    RecordingSessionRegistry,
)
from exceptions import (
    ConversionError,
    MissingUploadError,
    MissingUserIdentifierError,
    NoActiveRecordingError,
    TranscriptionError,
    TranscriptionPersistenceError,
)
from response_models import MessageResponse, StopRecordingResponse

logger = setup_logging()

router = APIRouter(tags=["recording"])

SessionHeader = Annotated[str | None, Header(pattern=SESSION_ID_PATTERN)]


@router.post("/upload-chunk", response_model=MessageResponse)
async def upload_chunk(
    accumulator: AccumulatorDep,
    registry: RegistryDep,
    chunk: Annotated[UploadFile | None, File()] = None,
    x_recording_session: SessionHeader = None,
) -> MessageResponse:
    """
    Appends one chunk to the current recording.

    Chunks must be sent one after another; they are stored in arrival order.
    Failures are left to the application error handler.
    """
    if chunk is None:
        raise MissingUploadError("chunk")

    session = registry.get(x_recording_session)
    try:
        async with registry.hold(session):
            await asyncio.to_thread(accumulator.append, session, chunk.file)
    finally:
        await chunk.close()

    return MessageResponse(message="Chunk received and appended")


async def _discard_artifact(
    registry: RecordingSessionRegistry,
    controller: RecordingSessionController,
    session: RecordingSession,
) -> None:
    async with registry.hold(session):
        controller.discard_artifact(session)


@router.post("/stop-recording", response_model=StopRecordingResponse)
async def stop_recording(
    background_tasks: BackgroundTasks,
    registry: RegistryDep,
    controller: ControllerDep,
    x_user_id: Annotated[str | None, Header()] = None,
    x_recording_session: SessionHeader = None,
) -> StopRecordingResponse:
    """
    Finalizes the current recording.

    Converts it to MP3, transcribes it and stores the transcript. The MP3 is
    deleted once the response has been sent.
    """
    session = registry.get(x_recording_session)

    async with registry.hold(session):
        try:
            result = await controller.finalize(session, x_user_id)
        except (NoActiveRecordingError, MissingUserIdentifierError) as e:
            raise HTTPException(status_code=400, detail=str(e))
        except ConversionError:
            raise HTTPException(status_code=500, detail="MP3 conversion failed")
        except TranscriptionError as e:
            raise HTTPException(status_code=500, detail=str(e))
        except TranscriptionPersistenceError:
            raise HTTPException(status_code=500, detail="Failed to save transcription")

    logger.info(
        "Recording finalized",
        extra={"session_id": result.session_id, "transcription_id": result.record_id},
    )
    background_tasks.add_task(_discard_artifact, registry, controller, session)
    return StopRecordingResponse(mp3=result.artifact_url, transcription=result.transcription)
