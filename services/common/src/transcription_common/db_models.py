from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import Column
from sqlalchemy.types import Text
from sqlmodel import Field, Relationship, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: Optional[str] = Field(default=None, max_length=255)

    transcriptions: List["Transcription"] = Relationship(back_populates="user")


class Transcription(SQLModel, table=True):
    __tablename__ = "transcriptions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    transcription: str = Field(sa_column=Column(Text, nullable=False))
    audio_url: Optional[str] = Field(default=None)
    user_id: Optional[UUID] = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=_utcnow, index=True)

    user: Optional[User] = Relationship(back_populates="transcriptions")
