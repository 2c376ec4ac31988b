"""Finalize pipeline for chunked recordings."""

import asyncio

from transcription_common.logging import setup_logging

from exceptions import (
    ConversionError,
    InvalidStateTransitionError,
    MissingUserIdentifierError,
    NoActiveRecordingError,
    TranscriptionError,
    TranscriptionPersistenceError,
)
from infrastructure.interfaces import MediaConverter, TranscriptionService
from repositories import TranscriptionRepository
from response_models import TranscriptionRecord

from .models import FinalizeResult, RecordingSession, RecordingState, TranscriptionOptions

logger = setup_logging()

_TRANSITIONS: dict[RecordingState, frozenset[RecordingState]] = {
    RecordingState.IDLE: frozenset({RecordingState.CONVERTING}),
    RecordingState.CONVERTING: frozenset(
        {RecordingState.TRANSCRIBING, RecordingState.FAILED}
    ),
    RecordingState.TRANSCRIBING: frozenset(
        {RecordingState.PERSISTING, RecordingState.FAILED}
    ),
    RecordingState.PERSISTING: frozenset({RecordingState.DONE, RecordingState.FAILED}),
    RecordingState.DONE: frozenset(),
    RecordingState.FAILED: frozenset(),
}


class RecordingSessionController:
    """
    Drives one finalize run: convert, transcribe, persist.

    A controller instance handles a single run and records the state it
    reached, so a failed run can be inspected afterwards. Blocking steps run
    in worker threads with a time budget each.

    Cleanup policy:
        - conversion succeeded: the working recording is deleted.
        - conversion failed: partial MP3 output is deleted, the working
          recording is kept so finalize can be retried. A timed out
          conversion is waited for before its output is deleted.
        - transcription or persistence failed: the MP3 is kept.
        - success: the caller removes the MP3 via discard_artifact once the
          response is sent.
    """

    def __init__(
        self,
        converter: MediaConverter,
        transcription_service: TranscriptionService,
        repository: TranscriptionRepository,
        options: TranscriptionOptions,
        conversion_timeout: float,
        transcription_timeout: float,
        public_prefix: str = "/uploads",
    ):
        self._converter = converter
        self._transcription_service = transcription_service
        self._repository = repository
        self._options = options
        self._conversion_timeout = conversion_timeout
        self._transcription_timeout = transcription_timeout
        self._public_prefix = public_prefix
        self.state = RecordingState.IDLE
        self.failure: Exception | None = None

    async def finalize(
        self, session: RecordingSession, user_id: str | None
    ) -> FinalizeResult:
        """
        Runs the whole pipeline for a session.

        Raises:
            NoActiveRecordingError: If nothing was recorded for the session.
            MissingUserIdentifierError: If no user id was supplied.
            ConversionError: If MP3 conversion fails or times out.
            TranscriptionError: If the provider fails, returns nothing or
                times out.
            TranscriptionPersistenceError: If the record cannot be saved.
        """
        if not session.has_recording():
            raise NoActiveRecordingError(session.session_id)
        if not user_id:
            raise MissingUserIdentifierError()

        await self._convert(session)
        transcription = await self._transcribe(session)
        record = await self._persist(session, transcription, user_id)

        self._transition(session, RecordingState.DONE)
        return FinalizeResult(
            session_id=session.session_id,
            artifact_url=session.artifact_url(self._public_prefix),
            transcription=transcription,
            record_id=str(record.id),
        )

    async def _convert(self, session: RecordingSession) -> None:
        self._transition(session, RecordingState.CONVERTING)
        worker = asyncio.ensure_future(
            asyncio.to_thread(
                self._converter.convert,
                session.working_path,
                session.artifact_path,
            )
        )
        try:
            await asyncio.wait_for(
                asyncio.shield(worker), timeout=self._conversion_timeout
            )
        except asyncio.TimeoutError as e:
            error = ConversionError(session.working_path.name, e)
            # The thread cannot be interrupted; wait for it so its output
            # is not written after the cleanup below.
            await self._drain(session, worker)
            session.artifact_path.unlink(missing_ok=True)
            self._fail(session, error)
            raise error from e
        except ConversionError as e:
            session.artifact_path.unlink(missing_ok=True)
            self._fail(session, e)
            raise

        session.working_path.unlink(missing_ok=True)

    async def _transcribe(self, session: RecordingSession) -> str:
        self._transition(session, RecordingState.TRANSCRIBING)
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._transcribe_artifact, session),
                timeout=self._transcription_timeout,
            )
        except asyncio.TimeoutError as e:
            error = TranscriptionError("Transcription timed out", e)
            self._fail(session, error)
            raise error from e
        except OSError as e:
            error = TranscriptionError(f"Cannot read {session.artifact_path.name}", e)
            self._fail(session, error)
            raise error from e
        except TranscriptionError as e:
            self._fail(session, e)
            raise

    def _transcribe_artifact(self, session: RecordingSession) -> str:
        with open(session.artifact_path, "rb") as audio:
            return self._transcription_service.transcribe(audio, self._options)

    async def _persist(
        self, session: RecordingSession, transcription: str, user_id: str
    ) -> TranscriptionRecord:
        self._transition(session, RecordingState.PERSISTING)
        try:
            return await asyncio.to_thread(
                self._repository.save, transcription, None, user_id
            )
        except TranscriptionPersistenceError as e:
            self._fail(session, e)
            raise

    async def _drain(self, session: RecordingSession, worker: asyncio.Future) -> None:
        try:
            await worker
        except Exception:
            logger.warning(
                "Timed out conversion finished with an error",
                extra={"session_id": session.session_id},
                exc_info=True,
            )
        else:
            logger.warning(
                "Timed out conversion finished late, discarding its output",
                extra={"session_id": session.session_id},
            )

    def discard_artifact(self, session: RecordingSession) -> None:
        """Removes the converted MP3; failures are logged, not raised."""
        try:
            session.artifact_path.unlink(missing_ok=True)
        except OSError:
            logger.warning(
                "Failed to remove converted recording",
                extra={"artifact_path": str(session.artifact_path)},
                exc_info=True,
            )

    def _transition(self, session: RecordingSession, target: RecordingState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise InvalidStateTransitionError(self.state.value, target.value)
        logger.info(
            "Recording state changed",
            extra={
                "session_id": session.session_id,
                "from_state": self.state.value,
                "to_state": target.value,
            },
        )
        self.state = target

    def _fail(self, session: RecordingSession, error: Exception) -> None:
        self.failure = error
        logger.error(
            "Recording finalize failed",
            extra={
                "session_id": session.session_id,
                "state": self.state.value,
                "error": str(error),
            },
        )
        self._transition(session, RecordingState.FAILED)
