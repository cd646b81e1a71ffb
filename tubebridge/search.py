"""Compact, LLM-friendly digest of upstream search results."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from .client import InvidiousClient
from .formatting import NA, format_duration, format_number

NO_RESULTS_MESSAGE = "No search results found."

SPECIAL_PROPERTIES = {
    "liveNow": "Live Now",
    "isUpcoming": "Upcoming",
    "premium": "Premium Content",
    "isNew": "New Video",
    "is4k": "4K Quality",
    "is8k": "8K Quality",
    "isVr180": "VR180 Video",
    "isVr360": "360° Video",
    "is3d": "3D Video",
    "hasCaptions": "Has Captions",
}


def _video(item: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "type": "video",
        "title": item.get("title"),
        "videoId": item.get("videoId"),
        "uploadDate": item.get("publishedText") or NA,
        "views": format_number(item.get("viewCount")),
        "length": format_duration(item.get("lengthSeconds")),
        "channelName": item.get("author"),
        "isVerified": bool(item.get("authorVerified")),
        "specialProperties": [label for key, label in SPECIAL_PROPERTIES.items() if item.get(key) is True],
    }


def _channel(item: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "type": "channel",
        "name": item.get("author"),
        "channelId": item.get("authorId"),
        "handle": item.get("channelHandle") or NA,
        "isVerified": bool(item.get("authorVerified")),
        "subscribers": format_number(item.get("subCount")),
        "videoCount": format_number(item.get("videoCount")),
        "description": item.get("description") or "No description available.",
    }


def _playlist(item: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "type": "playlist",
        "title": item.get("title"),
        "playlistId": item.get("playlistId"),
        "videoCount": item.get("videoCount"),
        "author": item.get("author"),
    }


FORMATTERS: Dict[str, Callable[[Mapping[str, Any]], Dict[str, Any]]] = {
    "video": _video,
    "channel": _channel,
    "playlist": _playlist,
}


def format_search_item(item: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(item, Mapping):
        return None
    formatter = FORMATTERS.get(item.get("type"))
    return formatter(item) if formatter else None


def format_search_results(items: Any) -> Dict[str, Any]:
    if not isinstance(items, list) or not items:
        return {"message": NO_RESULTS_MESSAGE, "results": []}
    results: List[Dict[str, Any]] = []
    for item in items:
        formatted = format_search_item(item)
        if formatted is not None:
            results.append(formatted)
    return {"results": results}


async def analyze_search(client: InvidiousClient, query: str) -> Dict[str, Any]:
    return format_search_results(await client.search(query))
