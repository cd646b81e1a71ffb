from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..config import Settings
from ..errors import UpstreamUnavailable, WebSearchNotConfigured
from ..websearch import web_search
from .deps import error_from, error_response, get_settings

router = APIRouter(tags=["Web Search"])


@router.get("/api/search")
async def search(
    q: Optional[str] = Query(None, description="Search query"),
    settings: Settings = Depends(get_settings),
):
    if not q:
        return error_response("Search query (q) is required.", 400)
    try:
        return await web_search(q, settings)
    except WebSearchNotConfigured as exc:
        return error_from(exc)
    except UpstreamUnavailable as exc:
        return error_response("Failed to fetch search results from the API.", 500, details=str(exc))
