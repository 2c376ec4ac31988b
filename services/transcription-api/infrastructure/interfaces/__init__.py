"""Infrastructure interface exports."""

from .media_converter import MediaConverter
from .transcription_service import TranscriptionService

__all__ = ["MediaConverter", "TranscriptionService"]
