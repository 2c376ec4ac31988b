"""Request body size limit applied before any endpoint reads the body."""

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send
from transcription_common.logging import setup_logging

from exceptions import UploadTooLargeError

logger = setup_logging()

# Room for multipart boundaries and part headers around the file itself.
MULTIPART_OVERHEAD_BYTES = 64 * 1024


class BodySizeLimitMiddleware:
    """
    Rejects request bodies larger than max_body_bytes with a 413.

    A declared Content-Length over the limit is refused without reading the
    body. Bodies without one are counted as they stream in, and reading stops
    as soon as the limit is passed.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = _content_length(scope)
        if declared is not None and declared > self.max_body_bytes:
            error = UploadTooLargeError(declared, self.max_body_bytes)
            logger.info(
                "Request body rejected",
                extra={"path": scope.get("path"), "size": declared},
            )
            response = JSONResponse(status_code=413, content={"error": str(error)})
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    error = UploadTooLargeError(received, self.max_body_bytes)
                    logger.info(
                        "Request body rejected",
                        extra={"path": scope.get("path"), "size": received},
                    )
                    raise HTTPException(status_code=413, detail=str(error))
            return message

        await self.app(scope, limited_receive, send)


def _content_length(scope: Scope) -> int | None:
    for name, value in scope.get("headers", []):
        if name == b"content-length":
            try:
                return int(value)
            except ValueError:
                return None
    return None
