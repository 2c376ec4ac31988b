import pytest

from exceptions import ConversionError
from infrastructure import MoviePyConverter


def test_missing_source_raises_conversion_error(tmp_path):
    source = tmp_path / "live_recording.webm"

    with pytest.raises(ConversionError) as exc_info:
        MoviePyConverter().convert(source, tmp_path / "final_recording.mp3")

    assert exc_info.value.file_name == "live_recording.webm"
    assert exc_info.value.cause is not None


def test_garbage_source_raises_conversion_error(tmp_path):
    source = tmp_path / "live_recording.webm"
    source.write_bytes(b"this is not a media container")

    with pytest.raises(ConversionError):
        MoviePyConverter().convert(source, tmp_path / "final_recording.mp3")
