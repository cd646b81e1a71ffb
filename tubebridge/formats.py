"""Turn raw format descriptors into categorised, directly fetchable links."""

from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, Field

from .config import Settings

COMBINED = "Video+Audio"
VIDEO_ONLY = "Video Only"
AUDIO_ONLY = "Audio Only"


class StreamLink(BaseModel):
    quality: str
    itag: Optional[str] = None
    type: str
    container: Optional[str] = None
    url: str


class StreamLinkSet(BaseModel):
    combined: List[StreamLink] = Field(default_factory=list)
    videoOnly: List[StreamLink] = Field(default_factory=list)
    audioOnly: List[StreamLink] = Field(default_factory=list)


def stream_url(settings: Settings, video_id: str, itag: Any, *, local: Optional[bool] = None) -> str:
    params: Dict[str, str] = {"v": str(video_id), "itag": str(itag)}
    if local is not None:
        params["local"] = "true" if local else "false"
    return f"{settings.base_url}/download?{urlencode(params)}"


def _video_quality(fmt: Mapping[str, Any]) -> str:
    return str(fmt.get("qualityLabel") or fmt.get("resolution") or "N/A")


def _audio_quality(fmt: Mapping[str, Any]) -> str:
    # bitrate is the only quality signal upstream gives for audio streams
    try:
        bitrate = float(fmt.get("bitrate"))
    except (TypeError, ValueError):
        return "N/A"
    if not math.isfinite(bitrate):
        return "N/A"
    return f"{round(bitrate / 1000)}kbps"


def _link(settings: Settings, video_id: str, fmt: Mapping[str, Any], kind: str, quality: str) -> StreamLink:
    itag = fmt.get("itag")
    return StreamLink(
        quality=quality,
        itag=str(itag) if itag is not None else None,
        type=kind,
        container=fmt.get("container"),
        url=stream_url(settings, video_id, itag),
    )


def build_stream_links(
    settings: Settings,
    details: Mapping[str, Any],
    video_id: Optional[str] = None,
) -> StreamLinkSet:
    vid = details.get("videoId") or video_id or ""
    links = StreamLinkSet()

    combined = details.get("formatStreams")
    if isinstance(combined, list):
        for fmt in combined:
            if isinstance(fmt, Mapping):
                links.combined.append(_link(settings, vid, fmt, COMBINED, _video_quality(fmt)))

    adaptive = details.get("adaptiveFormats")
    if isinstance(adaptive, list):
        for fmt in adaptive:
            if not isinstance(fmt, Mapping):
                continue
            mime = str(fmt.get("type") or "")
            if mime.startswith("video/"):
                links.videoOnly.append(_link(settings, vid, fmt, VIDEO_ONLY, _video_quality(fmt)))
            elif mime.startswith("audio/"):
                links.audioOnly.append(_link(settings, vid, fmt, AUDIO_ONLY, _audio_quality(fmt)))

    return links
