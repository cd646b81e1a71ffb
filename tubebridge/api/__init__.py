from .analyze import router as analyze_router
from .fetch import router as fetch_router
from .media import router as media_router
from .transcript import router as transcript_router
from .websearch import router as websearch_router

__all__ = [
    "analyze_router",
    "fetch_router",
    "media_router",
    "transcript_router",
    "websearch_router",
]
