from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..client import InvidiousClient
from ..errors import TubeBridgeError
from ..video import video_transcript
from .deps import error_from, error_response, get_client

router = APIRouter(tags=["Transcript"])

logger = logging.getLogger("tubebridge.api.transcript")


@router.get("/api/transcript")
async def transcript(
    v: Optional[str] = Query(None, description="Video ID"),
    format: str = Query("text", pattern="^(text|segments)$"),
    client: InvidiousClient = Depends(get_client),
):
    if not v:
        return error_response("A video ID 'v' is required.", 400)
    try:
        return await video_transcript(client, v, as_segments=format == "segments")
    except TubeBridgeError as exc:
        logger.info("transcript for %s unavailable: %s", v, exc)
        return error_from(exc)
    except Exception as exc:  # noqa: BLE001
        logger.exception("transcript for %s failed", v)
        return error_response("An unexpected server error occurred.", 500, details=str(exc))
