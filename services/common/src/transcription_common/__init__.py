from transcription_common.config import DatabaseConfig
from transcription_common.db_models import Transcription, User
from transcription_common.logging import setup_logging

__all__ = [
    "setup_logging",
    "DatabaseConfig",
    "Transcription",
    "User",
]
