"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod
from typing import BinaryIO

from domain.models import TranscriptionOptions


class TranscriptionService(ABC):
    """Abstract base class for speech-to-text backends."""

    @abstractmethod
    def transcribe(self, audio: BinaryIO, options: TranscriptionOptions) -> str:
        """
        Transcribes an audio stream in one blocking round trip.

        Args:
            audio: Readable binary stream with the audio file contents.
            options: Punctuation and language settings.

        Returns:
            The transcript text of the first channel.

        Raises:
            TranscriptionProviderError: If the provider reports an error.
            EmptyTranscriptionError: If the response holds no transcript.
        """
