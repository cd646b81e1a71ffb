"""LLM-oriented endpoints: the text video report and the search digest."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from ..client import InvidiousClient
from ..config import Settings
from ..report import render_video_report
from ..search import analyze_search as search_digest
from .deps import error_response, get_client, get_settings

router = APIRouter(tags=["Analyze"])

logger = logging.getLogger("tubebridge.api.analyze")


@router.get("/api/analyze_video")
async def analyze_video(
    v: Optional[str] = Query(None, description="Video ID"),
    client: InvidiousClient = Depends(get_client),
    settings: Settings = Depends(get_settings),
):
    if not v:
        return error_response("A video ID is required.", 400)
    try:
        report = await render_video_report(client, v, settings.report_top_comments)
    except Exception as exc:  # noqa: BLE001
        logger.exception("report for %s failed", v)
        return PlainTextResponse(f"An unexpected server error occurred: {exc}", status_code=500)
    return PlainTextResponse(report)


@router.get("/api/analyze_search")
async def analyze_search(
    q: Optional[str] = Query(None, description="Search query"),
    client: InvidiousClient = Depends(get_client),
):
    if not q:
        return error_response("A search query 'q' is required.", 400)
    try:
        return await search_digest(client, q)
    except Exception as exc:  # noqa: BLE001
        logger.warning("search for %r failed: %s", q, exc)
        return error_response(f"An unexpected error occurred during search: {exc}", 500)
