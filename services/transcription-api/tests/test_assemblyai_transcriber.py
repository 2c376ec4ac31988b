import io
from types import SimpleNamespace

import assemblyai as aai
import pytest

from domain import TranscriptionOptions
from exceptions import EmptyTranscriptionError, TranscriptionProviderError
from infrastructure import AssemblyAITranscriber


class StubTranscriber:
    def __init__(self, transcript=None, error=None):
        self.transcript = transcript
        self.error = error
        self.calls = []

    def transcribe(self, data, config=None):
        self.calls.append((data, config))
        if self.error is not None:
            raise self.error
        return self.transcript


def _transcript(status=aai.TranscriptStatus.completed, text="hello world", error=None):
    return SimpleNamespace(id="tr_123", status=status, text=text, error=error)


def test_returns_transcript_text():
    stub = StubTranscriber(_transcript())
    audio = io.BytesIO(b"mp3")

    text = AssemblyAITranscriber(stub).transcribe(audio, TranscriptionOptions())

    assert text == "hello world"
    assert stub.calls[0][0] is audio


def test_forwards_options_to_provider():
    stub = StubTranscriber(_transcript())

    AssemblyAITranscriber(stub).transcribe(
        io.BytesIO(b"mp3"), TranscriptionOptions(punctuate=False, language="de")
    )

    config = stub.calls[0][1]
    assert config.punctuate is False
    assert config.language_code == "de"


def test_provider_error_status():
    stub = StubTranscriber(
        _transcript(status=aai.TranscriptStatus.error, text=None, error="Bad audio")
    )

    with pytest.raises(TranscriptionProviderError, match="Bad audio"):
        AssemblyAITranscriber(stub).transcribe(io.BytesIO(b"x"), TranscriptionOptions())


def test_missing_text_is_empty_result():
    stub = StubTranscriber(_transcript(text=None))

    with pytest.raises(EmptyTranscriptionError):
        AssemblyAITranscriber(stub).transcribe(io.BytesIO(b"x"), TranscriptionOptions())


def test_empty_string_is_a_valid_transcript():
    stub = StubTranscriber(_transcript(text=""))

    assert AssemblyAITranscriber(stub).transcribe(io.BytesIO(b"x"), TranscriptionOptions()) == ""


def test_sdk_exception_becomes_provider_error():
    stub = StubTranscriber(error=ConnectionError("network unreachable"))

    with pytest.raises(TranscriptionProviderError, match="network unreachable") as exc_info:
        AssemblyAITranscriber(stub).transcribe(io.BytesIO(b"x"), TranscriptionOptions())

    assert isinstance(exc_info.value.cause, ConnectionError)
