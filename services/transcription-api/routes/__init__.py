from .recording import router as recording_router
from .transcriptions import router as transcriptions_router
from .upload import router as upload_router

__all__ = ["recording_router", "transcriptions_router", "upload_router"]
