"""FastAPI application entrypoint for the tubebridge service."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .api import analyze_router, fetch_router, media_router, transcript_router, websearch_router
from .client import InvidiousClient
from .config import Settings, load_settings

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger("tubebridge")


def create_app(settings: Optional[Settings] = None, client: Optional[InvidiousClient] = None) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="tubebridge", version="0.1.0")
    app.state.settings = settings
    app.state.client = client
    app.state.owns_client = client is None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(fetch_router)
    app.include_router(media_router)
    app.include_router(analyze_router)
    app.include_router(transcript_router)
    app.include_router(websearch_router)

    @app.on_event("startup")
    async def _startup() -> None:
        if app.state.client is None:
            app.state.client = InvidiousClient(settings)
            logger.info("upstream API at %s", settings.api_base)

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        if app.state.owns_client and app.state.client is not None:
            await app.state.client.aclose()
            app.state.client = None

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok", "upstream": settings.api_base}

    # mounted last so the API routes take precedence
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")
    else:
        logger.debug("static directory %s not found; skipping mount", static_dir)

    return app


app = create_app()


if __name__ == "__main__":  # pragma: no cover - manual launch helper
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
