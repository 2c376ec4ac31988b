"""Domain layer exports."""

from .models import (
    DEFAULT_SESSION_ID,
    SESSION_ID_PATTERN,
    FinalizeResult,
    RecordingSession,
    RecordingState,
    TranscriptionOptions,
)
from .chunk_accumulator import ChunkAccumulator
from .session_registry import RecordingSessionRegistry
from .recording_controller import RecordingSessionController

__all__ = [
    "DEFAULT_SESSION_ID",
    "SESSION_ID_PATTERN",
    "ChunkAccumulator",
    "FinalizeResult",
    "RecordingSession",
    "RecordingSessionController",
    "RecordingSessionRegistry",
    "RecordingState",
    "TranscriptionOptions",
]
