"""Stream link listing and the download proxy."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, StreamingResponse
from starlette.background import BackgroundTask

from ..client import InvidiousClient
from ..errors import TubeBridgeError
from ..formats import build_stream_links
from .deps import error_response, get_client

router = APIRouter(tags=["Media"])

logger = logging.getLogger("tubebridge.api.media")


@router.get("/api/formats")
async def formats(
    v: Optional[str] = Query(None, description="Video ID"),
    client: InvidiousClient = Depends(get_client),
):
    if not v:
        return error_response("A video ID 'v' is required.", 400)
    try:
        details = await client.video_details(v)
        return build_stream_links(client.settings, details, v)
    except Exception as exc:  # noqa: BLE001
        logger.warning("formats lookup failed for %s: %s", v, exc)
        return error_response(f"Failed to get formats: {exc}", 500)


@router.get("/api/stream")
async def stream(
    v: Optional[str] = Query(None, description="Video ID"),
    itag: Optional[str] = Query(None),
    client: InvidiousClient = Depends(get_client),
):
    if not v or not itag:
        return error_response("Both video ID 'v' and 'itag' are required.", 400)
    try:
        upstream = await client.open_stream(v, itag)
    except TubeBridgeError as exc:
        logger.warning("stream %s/%s failed: %s", v, itag, exc)
        return PlainTextResponse(f"Error streaming content: {exc}", status_code=500)

    # aiter_raw leaves the body encoded
    headers = {}
    for name in ("Content-Length", "Content-Encoding"):
        value = upstream.headers.get(name)
        if value:
            headers[name] = value
    return StreamingResponse(
        upstream.aiter_raw(),
        media_type=upstream.headers.get("content-type"),
        headers=headers,
        background=BackgroundTask(upstream.aclose),
    )
