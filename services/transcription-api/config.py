"""Application configuration loaded from environment variables."""

import os
from pathlib import Path

from pydantic import BaseModel, Field
from transcription_common import DatabaseConfig

from exceptions import MissingConfigurationError

DEFAULT_UPLOADS_DIR = Path(__file__).parent / "uploads"


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str
    language: str = "en_us"
    punctuate: bool = True


class StorageConfig(BaseModel, frozen=True):
    """Local storage for uploads, recordings and converted audio."""

    uploads_dir: Path = DEFAULT_UPLOADS_DIR
    public_prefix: str = "/uploads"
    max_upload_bytes: int = Field(default=50 * 1024 * 1024, gt=0)


class PipelineConfig(BaseModel, frozen=True):
    """Time budgets for the blocking steps of the finalize pipeline."""

    conversion_timeout_seconds: float = Field(default=300.0, gt=0)
    transcription_timeout_seconds: float = Field(default=600.0, gt=0)


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    database: DatabaseConfig
    assemblyai: AssemblyAIConfig
    storage: StorageConfig = StorageConfig()
    pipeline: PipelineConfig = PipelineConfig()
    port: int = 5000
    cors_allow_origins: list[str] = ["*"]


def _require(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise MissingConfigurationError(name)
    return value


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config() -> AppConfig:
    """
    Loads configuration from environment variables.

    Raises:
        MissingConfigurationError: If a required variable is unset or empty.
    """
    return AppConfig(
        database=DatabaseConfig(
            host=_require("POSTGRES_HOST"),
            password=_require("POSTGRES_PASSWORD"),
            port=os.getenv("POSTGRES_PORT", "5432"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            database=os.getenv("POSTGRES_DB", "transcriptions"),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=_require("ASSEMBLYAI_API_KEY"),
            language=os.getenv("TRANSCRIPTION_LANGUAGE", "en_us"),
            punctuate=_as_bool(os.getenv("TRANSCRIPTION_PUNCTUATE", "true")),
        ),
        storage=StorageConfig(
            uploads_dir=Path(os.getenv("UPLOADS_DIR", str(DEFAULT_UPLOADS_DIR))),
            max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(50 * 1024 * 1024))),
        ),
        pipeline=PipelineConfig(
            conversion_timeout_seconds=float(
                os.getenv("CONVERSION_TIMEOUT_SECONDS", "300")
            ),
            transcription_timeout_seconds=float(
                os.getenv("TRANSCRIPTION_TIMEOUT_SECONDS", "600")
            ),
        ),
        port=int(os.getenv("PORT", "5000")),
        cors_allow_origins=[
            origin.strip()
            for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
            if origin.strip()
        ],
    )
