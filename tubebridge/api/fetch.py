"""Raw data endpoint: any mix of fields for a video, a channel and a query."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..aggregate import AggregateRequest, aggregate
from ..client import InvidiousClient
from ..errors import NoFields, NoTarget
from .deps import error_from, error_response, get_client

router = APIRouter(tags=["Fetch"])

logger = logging.getLogger("tubebridge.api.fetch")


@router.get("/api/fetch")
async def fetch(
    video_id: Optional[str] = Query(None, alias="id"),
    channel: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    fields: Optional[str] = Query(None, description="Comma separated: details,comments,transcript,channel,search_results"),
    client: InvidiousClient = Depends(get_client),
):
    request = AggregateRequest.from_params(video_id, channel, search, fields)
    try:
        return await aggregate(client, request)
    except (NoTarget, NoFields) as exc:
        return error_from(exc)
    except Exception as exc:  # noqa: BLE001
        logger.exception("fetch failed for %s", request)
        return error_response("An unexpected server error occurred.", 500, details=str(exc))
