"""Single-file upload endpoint."""

import asyncio
import os
import shutil
import tempfile
from pathlib import Path
from typing import Annotated, BinaryIO

from fastapi import APIRouter, File, Header, HTTPException, UploadFile
from transcription_common.logging import setup_logging

from dependencies import (
    ConfigDep,
    RepositoryDep,
    TranscriptionOptionsDep,
    TranscriptionServiceDep,
)
from domain import TranscriptionOptions
from exceptions import (
    MissingUploadError,
    TranscriptionError,
    TranscriptionPersistenceError,
    UploadTooLargeError,
)
from infrastructure.interfaces import TranscriptionService
from response_models import UploadResponse

logger = setup_logging()

router = APIRouter(tags=["upload"])


def _check_size(audio: UploadFile, limit: int) -> None:
    if audio.size is not None and audio.size > limit:
        raise UploadTooLargeError(audio.size, limit)


def _spool(source: BinaryIO, suffix: str) -> Path:
    """Copies the upload to a temporary file owned by the transcription worker."""
    fd, name = tempfile.mkstemp(prefix="upload_", suffix=suffix)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as target:
            shutil.copyfileobj(source, target)
    except OSError:
        path.unlink(missing_ok=True)
        raise
    return path


def _transcribe_spooled(
    transcription_service: TranscriptionService,
    path: Path,
    options: TranscriptionOptions,
) -> str:
    try:
        with open(path, "rb") as audio:
            return transcription_service.transcribe(audio, options)
    finally:
        path.unlink(missing_ok=True)


def _log_late_result(file_name: str | None, worker: asyncio.Future) -> None:
    if worker.cancelled():
        return
    error = worker.exception()
    if error is not None:
        logger.warning(
            "Timed out transcription finished with an error",
            extra={"file_name": file_name, "error": str(error)},
        )
    else:
        logger.warning(
            "Timed out transcription finished late, discarding its result",
            extra={"file_name": file_name},
        )


@router.post("/upload", response_model=UploadResponse)
async def upload_audio(
    config: ConfigDep,
    repository: RepositoryDep,
    transcription_service: TranscriptionServiceDep,
    options: TranscriptionOptionsDep,
    audio: Annotated[UploadFile | None, File()] = None,
    x_user_id: Annotated[str | None, Header()] = None,
) -> UploadResponse:
    """
    Transcribes a complete audio file and stores the transcript.

    The upload buffer is released before transcription starts. The worker
    thread reads its own temporary copy and removes it when done, even if
    the request has already timed out.
    """
    if audio is None:
        raise HTTPException(status_code=400, detail=str(MissingUploadError("audio")))

    try:
        if not x_user_id:
            raise HTTPException(status_code=400, detail="Missing user_id in request")

        try:
            _check_size(audio, config.storage.max_upload_bytes)
        except UploadTooLargeError as e:
            raise HTTPException(status_code=413, detail=str(e))

        logger.info(
            "Received audio upload",
            extra={"file_name": audio.filename, "size": audio.size, "user_id": x_user_id},
        )
        suffix = Path(audio.filename or "").suffix
        spooled = await asyncio.to_thread(_spool, audio.file, suffix)
    finally:
        await audio.close()

    worker = asyncio.ensure_future(
        asyncio.to_thread(_transcribe_spooled, transcription_service, spooled, options)
    )
    try:
        transcription = await asyncio.wait_for(
            asyncio.shield(worker),
            timeout=config.pipeline.transcription_timeout_seconds,
        )
    except asyncio.TimeoutError:
        logger.error("Transcription timed out", extra={"file_name": audio.filename})
        worker.add_done_callback(lambda f: _log_late_result(audio.filename, f))
        raise HTTPException(status_code=500, detail="Transcription timed out")
    except TranscriptionError as e:
        raise HTTPException(status_code=500, detail=str(e))

    try:
        await asyncio.to_thread(repository.save, transcription, None, x_user_id)
    except TranscriptionPersistenceError:
        raise HTTPException(status_code=500, detail="Failed to save transcription")

    return UploadResponse(transcription=transcription)
