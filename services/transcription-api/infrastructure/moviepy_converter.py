"""moviepy implementation of the MediaConverter interface."""

from pathlib import Path

import moviepy
from transcription_common.logging import setup_logging

from exceptions import ConversionError

from .interfaces import MediaConverter

logger = setup_logging()


class MoviePyConverter(MediaConverter):
    """Converts recordings to MP3 through moviepy's ffmpeg backend."""

    def __init__(self, codec: str = "libmp3lame", bitrate: str | None = None):
        self._codec = codec
        self._bitrate = bitrate

    def convert(self, source_path: Path, output_path: Path) -> None:
        try:
            clip = moviepy.AudioFileClip(str(source_path))
            try:
                clip.write_audiofile(
                    str(output_path),
                    codec=self._codec,
                    bitrate=self._bitrate,
                    logger=None,
                )
            finally:
                clip.close()
        except Exception as e:
            logger.exception(
                "MP3 conversion failed", extra={"source_path": str(source_path)}
            )
            raise ConversionError(source_path.name, e) from e

        logger.info(
            "Recording converted",
            extra={"source_path": str(source_path), "output_path": str(output_path)},
        )
