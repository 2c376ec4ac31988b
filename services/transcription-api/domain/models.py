"""Domain models for the transcription service."""

import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel

DEFAULT_SESSION_ID = "default"
SESSION_ID_PATTERN = r"^[A-Za-z0-9_-]{1,64}$"

_SESSION_ID_RE = re.compile(SESSION_ID_PATTERN)


class TranscriptionOptions(BaseModel, frozen=True):
    """Options forwarded to the speech-to-text provider."""

    punctuate: bool = True
    language: str = "en_us"


class RecordingState(str, Enum):
    """States of a single finalize run."""

    IDLE = "idle"
    CONVERTING = "converting"
    TRANSCRIBING = "transcribing"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


class RecordingSession(BaseModel, frozen=True):
    """
    File locations owned by one chunked recording.

    The default session keeps the historical well-known names
    (live_recording.webm / final_recording.mp3); other sessions get the
    session id appended so several recordings can run side by side.
    """

    session_id: str
    working_path: Path
    artifact_path: Path

    @classmethod
    def create(cls, uploads_dir: Path, session_id: str | None = None) -> "RecordingSession":
        """
        Builds the session for an id inside the uploads directory.

        Raises:
            ValueError: If the session id contains characters outside
                [A-Za-z0-9_-] or is longer than 64 characters.
        """
        session_id = session_id or DEFAULT_SESSION_ID
        if not _SESSION_ID_RE.fullmatch(session_id):
            raise ValueError(f"Invalid recording session id '{session_id}'")

        suffix = "" if session_id == DEFAULT_SESSION_ID else f"_{session_id}"
        return cls(
            session_id=session_id,
            working_path=uploads_dir / f"live_recording{suffix}.webm",
            artifact_path=uploads_dir / f"final_recording{suffix}.mp3",
        )

    def has_recording(self) -> bool:
        return self.working_path.exists()

    def artifact_url(self, public_prefix: str = "/uploads") -> str:
        """Path under which the static mount serves the converted audio."""
        return f"{public_prefix.rstrip('/')}/{self.artifact_path.name}"


class FinalizeResult(BaseModel, frozen=True):
    """Outcome of a successful finalize run."""

    session_id: str
    artifact_url: str
    transcription: str
    record_id: str
