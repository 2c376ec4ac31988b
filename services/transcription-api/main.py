"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import uvicorn
from ddtrace import patch_all
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from transcription_common.logging import setup_logging

from dependencies import get_config, init_database
from error_handlers import register_exception_handlers
from middleware import MULTIPART_OVERHEAD_BYTES, BodySizeLimitMiddleware
from routes import recording_router, transcriptions_router, upload_router

patch_all()
logger = setup_logging()

_config = get_config()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_database()
    logger.info("Transcription API started", extra={"port": _config.port})
    yield


app = FastAPI(title="Transcription API", lifespan=lifespan)
app.add_middleware(
    BodySizeLimitMiddleware,
    max_body_bytes=_config.storage.max_upload_bytes + MULTIPART_OVERHEAD_BYTES,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_config.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)
app.include_router(upload_router)
app.include_router(recording_router)
app.include_router(transcriptions_router)
app.mount(
    _config.storage.public_prefix,
    StaticFiles(directory=_config.storage.uploads_dir),
    name="uploads",
)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=_config.port, log_config=None)
