"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .moviepy_converter import MoviePyConverter

__all__ = ["AssemblyAITranscriber", "MoviePyConverter"]
