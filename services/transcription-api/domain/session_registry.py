"""Process-wide registry of recording sessions and their locks."""

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path

from .models import RecordingSession


class RecordingSessionRegistry:
    """
    Hands out recording sessions rooted in one uploads directory.

    Chunk appends and finalize runs for the same session go through hold(),
    so they never interleave. A session's lock only exists while someone
    holds or waits for it. The registry is only safe within a single process.
    """

    def __init__(self, uploads_dir: Path):
        self._uploads_dir = uploads_dir
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @property
    def uploads_dir(self) -> Path:
        return self._uploads_dir

    def get(self, session_id: str | None = None) -> RecordingSession:
        return RecordingSession.create(self._uploads_dir, session_id)

    @asynccontextmanager
    async def hold(self, session: RecordingSession):
        """Holds the session's lock for the duration of the block."""
        session_id = session.session_id
        if session_id not in self._locks:
            self._locks[session_id] = asyncio.Lock()
            self._users[session_id] = 0
        lock = self._locks[session_id]
        self._users[session_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._users[session_id] -= 1
            if self._users[session_id] == 0:
                del self._locks[session_id]
                del self._users[session_id]
