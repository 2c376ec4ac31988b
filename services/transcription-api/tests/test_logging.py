import json
import logging

from pythonjsonlogger import jsonlogger
from transcription_common.logging import setup_logging


def _json_handler(logger):
    return next(
        h for h in logger.handlers if isinstance(h.formatter, jsonlogger.JsonFormatter)
    )


def test_setup_logging_is_reused():
    first = _json_handler(setup_logging())
    second = _json_handler(setup_logging())

    assert first is second
    assert logging.getLogger("uvicorn.access").handlers == [first]


def test_records_are_json_with_service_field():
    handler = _json_handler(setup_logging())
    record = logging.LogRecord("recording", logging.INFO, __file__, 1, "Chunk appended", None, None)
    record.session_id = "default"

    payload = json.loads(handler.format(record))

    assert payload["message"] == "Chunk appended"
    assert payload["levelname"] == "INFO"
    assert payload["service"] == "transcription-api"
    assert payload["session_id"] == "default"
