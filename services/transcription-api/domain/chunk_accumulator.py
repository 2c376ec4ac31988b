"""Appends uploaded chunks to a session's working recording."""

import shutil
from typing import BinaryIO

from transcription_common.logging import setup_logging

from exceptions import ChunkAppendError

from .models import RecordingSession

logger = setup_logging()


class ChunkAccumulator:
    """Builds one contiguous recording out of sequentially uploaded chunks."""

    def append(self, session: RecordingSession, chunk: BinaryIO) -> int:
        """
        Appends a chunk to the end of the session's working file.

        The file (and its directory) is created on the first append. Chunks
        are written in the order this method is called; no reordering or
        deduplication takes place.

        Args:
            session: The recording the chunk belongs to.
            chunk: Readable binary stream holding the chunk payload.

        Returns:
            Number of bytes appended.

        Raises:
            ChunkAppendError: If the working file cannot be written.
        """
        try:
            session.working_path.parent.mkdir(parents=True, exist_ok=True)
            with open(session.working_path, "ab") as recording:
                start = recording.tell()
                shutil.copyfileobj(chunk, recording)
                written = recording.tell() - start
        except OSError as e:
            logger.exception(
                "Chunk append failed",
                extra={
                    "session_id": session.session_id,
                    "working_path": str(session.working_path),
                },
            )
            raise ChunkAppendError(session.session_id, e) from e

        logger.info(
            "Chunk appended",
            extra={"session_id": session.session_id, "bytes": written},
        )
        return written
