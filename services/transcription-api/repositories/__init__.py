"""Data access layer."""

from .transcription_repository import TranscriptionRepository

__all__ = ["TranscriptionRepository"]
