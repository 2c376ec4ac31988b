"""Abstract interface for audio conversion."""

from abc import ABC, abstractmethod
from pathlib import Path


class MediaConverter(ABC):
    """Abstract base class for recording-to-MP3 converters."""

    @abstractmethod
    def convert(self, source_path: Path, output_path: Path) -> None:
        """
        Converts a recording into an MP3 file.

        Args:
            source_path: The accumulated recording.
            output_path: Where the MP3 is written.

        Raises:
            ConversionError: If the conversion fails.
        """
