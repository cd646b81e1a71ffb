"""Answer-style web search backed by the RapidAPI Perplexity endpoint."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import Settings
from .errors import UpstreamUnavailable, WebSearchNotConfigured

LOGGER = logging.getLogger("tubebridge.websearch")

NO_ANSWER = "No answer found."


def _answer(payload: Dict[str, Any]) -> str:
    choices = payload.get("choices")
    content = choices.get("content") if isinstance(choices, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if isinstance(parts, list) and parts and isinstance(parts[0], dict):
        text = parts[0].get("text")
        if text:
            return str(text)
    return NO_ANSWER


def _sources(payload: Dict[str, Any]) -> List[Dict[str, Optional[str]]]:
    metadata = payload.get("groundingMetadata")
    chunks = metadata.get("groundingChunks") if isinstance(metadata, dict) else None
    if not isinstance(chunks, list):
        return []
    sources: List[Dict[str, Optional[str]]] = []
    for chunk in chunks:
        web = chunk.get("web") if isinstance(chunk, dict) else None
        if isinstance(web, dict):
            sources.append({"title": web.get("title"), "url": web.get("uri")})
    return sources


def parse_answer(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        return {"answer": NO_ANSWER, "sources": []}
    return {"answer": _answer(payload), "sources": _sources(payload)}


async def web_search(
    query: str,
    settings: Settings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    if not settings.rapidapi_key:
        raise WebSearchNotConfigured("Web search not configured (RAPIDAPI_KEY missing)")
    headers = {
        "x-rapidapi-key": settings.rapidapi_key,
        "x-rapidapi-host": settings.rapidapi_host,
        "Content-Type": "application/json",
    }
    kwargs: Dict[str, Any] = {}
    if settings.upstream_timeout is not None:
        kwargs["timeout"] = settings.upstream_timeout
    try:
        async with httpx.AsyncClient(transport=transport, **kwargs) as client:
            response = await client.post(settings.rapidapi_url, json={"content": query}, headers=headers)
            response.raise_for_status()
            payload = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        LOGGER.warning("RapidAPI request failed: %s", exc)
        raise UpstreamUnavailable(str(exc)) from exc
    return parse_answer(payload)
