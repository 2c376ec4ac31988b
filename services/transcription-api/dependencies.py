"""FastAPI dependency injection configuration."""

from contextlib import contextmanager
from typing import Annotated

import assemblyai as aai
from fastapi import Depends
from sqlmodel import Session, SQLModel, create_engine
from transcription_common.logging import setup_logging

from config import AppConfig, load_config
from domain import (
    ChunkAccumulator,
    RecordingSessionController,
    RecordingSessionRegistry,
    TranscriptionOptions,
)
from infrastructure import AssemblyAITranscriber, MoviePyConverter
from infrastructure.interfaces import MediaConverter, TranscriptionService
from repositories import TranscriptionRepository

logger = setup_logging()

_config = load_config()

# PostgreSQL database
_db_engine = create_engine(_config.database.url, pool_pre_ping=True)


@contextmanager
def _session_factory():
    """Creates a database session context manager."""
    with Session(_db_engine) as session:
        yield session


_repository = TranscriptionRepository(_session_factory)

# AssemblyAI setup
aai.settings.api_key = _config.assemblyai.api_key
_transcription_service = AssemblyAITranscriber(aai.Transcriber())
_transcription_options = TranscriptionOptions(
    punctuate=_config.assemblyai.punctuate,
    language=_config.assemblyai.language,
)

# Local recording storage
_converter = MoviePyConverter()
_accumulator = ChunkAccumulator()
_config.storage.uploads_dir.mkdir(parents=True, exist_ok=True)
_registry = RecordingSessionRegistry(_config.storage.uploads_dir)


def init_database() -> None:
    """Creates the database tables if they do not exist yet."""
    SQLModel.metadata.create_all(_db_engine)
    logger.info("Database initialized", extra={"host": _config.database.host})


def get_config() -> AppConfig:
    """Returns the loaded application configuration."""
    return _config


def get_repository() -> TranscriptionRepository:
    """Returns the configured transcription repository."""
    return _repository


def get_transcription_service() -> TranscriptionService:
    """Returns the configured transcription service."""
    return _transcription_service


def get_transcription_options() -> TranscriptionOptions:
    """Returns the provider options used for every request."""
    return _transcription_options


def get_converter() -> MediaConverter:
    """Returns the configured media converter."""
    return _converter


def get_accumulator() -> ChunkAccumulator:
    """Returns the chunk accumulator."""
    return _accumulator


def get_registry() -> RecordingSessionRegistry:
    """Returns the process-wide recording session registry."""
    return _registry


ConfigDep = Annotated[AppConfig, Depends(get_config)]
RepositoryDep = Annotated[TranscriptionRepository, Depends(get_repository)]
TranscriptionServiceDep = Annotated[
    TranscriptionService, Depends(get_transcription_service)
]
TranscriptionOptionsDep = Annotated[
    TranscriptionOptions, Depends(get_transcription_options)
]
ConverterDep = Annotated[MediaConverter, Depends(get_converter)]
AccumulatorDep = Annotated[ChunkAccumulator, Depends(get_accumulator)]
RegistryDep = Annotated[RecordingSessionRegistry, Depends(get_registry)]


def get_controller(
    config: ConfigDep,
    converter: ConverterDep,
    transcription_service: TranscriptionServiceDep,
    repository: RepositoryDep,
    options: TranscriptionOptionsDep,
) -> RecordingSessionController:
    """Creates a controller for one finalize run."""
    return RecordingSessionController(
        converter=converter,
        transcription_service=transcription_service,
        repository=repository,
        options=options,
        conversion_timeout=config.pipeline.conversion_timeout_seconds,
        transcription_timeout=config.pipeline.transcription_timeout_seconds,
        public_prefix=config.storage.public_prefix,
    )


ControllerDep = Annotated[RecordingSessionController, Depends(get_controller)]
