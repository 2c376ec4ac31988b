"""Repository for transcription data access."""

from typing import List
from uuid import UUID

from sqlmodel import col, select
from transcription_common.db_models import Transcription, User
from transcription_common.logging import setup_logging

from exceptions import TranscriptionPersistenceError
from response_models import TranscriptionRecord

logger = setup_logging()


class TranscriptionRepository:
    """
    Handles all database operations for transcriptions.

    User resolution and record insertion are separate calls: resolving a user
    never fails the caller, inserting does.
    """

    def __init__(self, session_factory):
        """
        Initializes the repository.

        Args:
            session_factory: Callable that returns a SQLModel Session context manager.
        """
        self._session_factory = session_factory

    def resolve_user(self, user_id: str) -> UUID | None:
        """
        Looks up a user by id.

        Returns:
            The user's UUID, or None when the id is malformed, unknown, or the
            lookup itself fails.
        """
        try:
            user_uuid = UUID(user_id)
        except ValueError:
            logger.warning(
                "Malformed user id, saving without association",
                extra={"user_id": user_id},
            )
            return None

        try:
            with self._session_factory() as db_session:
                user = db_session.get(User, user_uuid)
        except Exception:
            logger.warning(
                "User lookup failed, saving without association",
                extra={"user_id": user_id},
                exc_info=True,
            )
            return None

        if user is None:
            logger.warning(
                "User does not exist, saving without association",
                extra={"user_id": user_id},
            )
            return None
        return user.id

    def insert(
        self,
        transcription: str,
        audio_url: str | None = None,
        user_id: UUID | None = None,
    ) -> TranscriptionRecord:
        """
        Inserts a transcription record.

        Raises:
            TranscriptionPersistenceError: If the write fails.
        """
        try:
            with self._session_factory() as db_session:
                entity = Transcription(
                    transcription=transcription,
                    audio_url=audio_url,
                    user_id=user_id,
                )
                db_session.add(entity)
                db_session.commit()
                db_session.refresh(entity)
                record = TranscriptionRecord.model_validate(entity)
        except Exception as e:
            logger.exception("Failed to insert transcription")
            raise TranscriptionPersistenceError("insert", e) from e

        logger.info(
            "Transcription saved",
            extra={"transcription_id": str(record.id), "user_id": str(user_id)},
        )
        return record

    def save(
        self,
        transcription: str,
        audio_url: str | None = None,
        user_id: str | None = None,
    ) -> TranscriptionRecord:
        """Resolves the user (best effort) and inserts the record."""
        resolved = self.resolve_user(user_id) if user_id else None
        return self.insert(transcription, audio_url, resolved)

    def list_all(self) -> List[TranscriptionRecord]:
        """
        Retrieves all transcriptions, newest first.

        Raises:
            TranscriptionPersistenceError: If the query fails.
        """
        statement = select(Transcription).order_by(col(Transcription.created_at).desc())
        try:
            with self._session_factory() as db_session:
                results = db_session.exec(statement).all()
                return [TranscriptionRecord.model_validate(row) for row in results]
        except Exception as e:
            logger.exception("Failed to fetch transcriptions")
            raise TranscriptionPersistenceError("select", e) from e

    def delete(self, transcription_id: UUID) -> None:
        """
        Deletes a transcription by id. Deleting an absent id is a no-op.

        Raises:
            TranscriptionPersistenceError: If the delete fails.
        """
        try:
            with self._session_factory() as db_session:
                entity = db_session.get(Transcription, transcription_id)
                if entity is not None:
                    db_session.delete(entity)
                    db_session.commit()
        except Exception as e:
            logger.exception(
                "Failed to delete transcription",
                extra={"transcription_id": str(transcription_id)},
            )
            raise TranscriptionPersistenceError("delete", e) from e

        logger.info(
            "Transcription deleted", extra={"transcription_id": str(transcription_id)}
        )
