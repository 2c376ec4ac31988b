import os
import tempfile

os.environ.setdefault("DD_TRACE_ENABLED", "false")
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_PASSWORD", "test-password")
os.environ.setdefault("ASSEMBLYAI_API_KEY", "test-key")
os.environ.setdefault("UPLOADS_DIR", tempfile.mkdtemp(prefix="transcription-api-"))

from contextlib import contextmanager  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from transcription_common.db_models import User  # noqa: E402

from dependencies import (  # noqa: E402
    get_converter,
    get_registry,
    get_repository,
    get_transcription_service,
)
from domain import RecordingSessionRegistry, TranscriptionOptions  # noqa: E402
from exceptions import ConversionError  # noqa: E402
from infrastructure.interfaces import MediaConverter, TranscriptionService  # noqa: E402
from main import app  # noqa: E402
from repositories import TranscriptionRepository  # noqa: E402


class FakeConverter(MediaConverter):
    """Writes a fixed payload instead of running ffmpeg."""

    def __init__(self, payload: bytes = b"ID3-fake-mp3", error: Exception | None = None):
        self.payload = payload
        self.error = error
        self.sources: list[bytes] = []

    def convert(self, source_path, output_path):
        self.sources.append(source_path.read_bytes())
        if self.error is not None:
            output_path.write_bytes(b"partial")
            raise ConversionError(source_path.name, self.error)
        output_path.write_bytes(self.payload)


class FakeTranscriptionService(TranscriptionService):
    def __init__(self, text: str = "hello world", error: Exception | None = None):
        self.text = text
        self.error = error
        self.received: list[bytes] = []
        self.options: list[TranscriptionOptions] = []

    def transcribe(self, audio, options):
        self.received.append(audio.read())
        self.options.append(options)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    @contextmanager
    def factory():
        with Session(engine) as session:
            yield session

    return factory


@pytest.fixture
def repository(session_factory):
    return TranscriptionRepository(session_factory)


@pytest.fixture
def user(session_factory):
    with session_factory() as db_session:
        entity = User(email="listener@example.com")
        db_session.add(entity)
        db_session.commit()
        db_session.refresh(entity)
        return entity


@pytest.fixture
def uploads_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def registry(uploads_dir):
    return RecordingSessionRegistry(uploads_dir)


@pytest.fixture
def converter():
    return FakeConverter()


@pytest.fixture
def transcriber():
    return FakeTranscriptionService()


@pytest.fixture
def client(repository, registry, converter, transcriber):
    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_converter] = lambda: converter
    app.dependency_overrides[get_transcription_service] = lambda: transcriber
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
