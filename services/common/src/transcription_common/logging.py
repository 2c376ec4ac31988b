import logging
import os
import sys

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "transcription-api"

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")


def _configure(level: int) -> logging.Handler:
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s",
        static_fields={"service": SERVICE_NAME},
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    for logger_name in _UVICORN_LOGGERS:
        u_logger = logging.getLogger(logger_name)
        u_logger.setLevel(level)
        u_logger.handlers = [handler]
        u_logger.propagate = False

    return handler


_handler: logging.Handler | None = None


def setup_logging() -> logging.Logger:
    """
    Returns the root logger, configured for structured JSON output.

    The first call installs one stdout handler with a JSON formatter
    (timestamp, level, logger name, message, Datadog trace_id/span_id and a
    static service field) on the root logger and the Uvicorn loggers. Later
    calls reuse it unless something replaced the root handlers in between.
    The level comes from LOG_LEVEL (default INFO).
    """
    global _handler

    root_logger = logging.getLogger()
    if _handler is None or _handler not in root_logger.handlers:
        level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
        if not isinstance(level, int):
            level = logging.INFO
        _handler = _configure(level)
    return root_logger
