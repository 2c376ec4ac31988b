"""AssemblyAI implementation of the TranscriptionService interface."""

from typing import BinaryIO

import assemblyai as aai
from transcription_common.logging import setup_logging

from domain.models import TranscriptionOptions
from exceptions import EmptyTranscriptionError, TranscriptionProviderError

from .interfaces import TranscriptionService

logger = setup_logging()


class AssemblyAITranscriber(TranscriptionService):
    """Handles audio transcription using AssemblyAI."""

    def __init__(self, transcriber: aai.Transcriber):
        self._transcriber = transcriber

    def transcribe(self, audio: BinaryIO, options: TranscriptionOptions) -> str:
        """
        Uploads the stream to AssemblyAI and waits for the transcript.

        The SDK response is checked here once: an error status becomes
        TranscriptionProviderError, a missing text becomes
        EmptyTranscriptionError.
        """
        config = aai.TranscriptionConfig(
            punctuate=options.punctuate,
            language_code=options.language,
        )

        try:
            transcript = self._transcriber.transcribe(audio, config=config)
        except Exception as e:
            logger.exception("AssemblyAI request failed")
            raise TranscriptionProviderError(str(e) or "Transcription request failed", e) from e

        if transcript.status == aai.TranscriptStatus.error:
            logger.error(
                "AssemblyAI reported an error",
                extra={"transcript_id": transcript.id, "error": transcript.error},
            )
            raise TranscriptionProviderError(transcript.error or "Transcription failed")

        if transcript.text is None:
            logger.error(
                "AssemblyAI returned no text", extra={"transcript_id": transcript.id}
            )
            raise EmptyTranscriptionError()

        logger.info(
            "Audio transcription successful",
            extra={"transcript_id": transcript.id, "characters": len(transcript.text)},
        )
        return transcript.text
