"""Public exports for the tubebridge package."""

from .aggregate import AggregateRequest, Outcome, aggregate, settle, settle_all
from .client import InvidiousClient
from .config import Settings, load_settings
from .errors import (
    InvalidVideo,
    MissingParameter,
    NoCaptions,
    NoFields,
    NoTarget,
    TranscriptParseError,
    TubeBridgeError,
    UnrecognizedFormat,
    UpstreamNotFound,
    UpstreamUnavailable,
    WebSearchNotConfigured,
)
from .formats import StreamLink, StreamLinkSet, build_stream_links, stream_url
from .report import render_video_report
from .search import analyze_search, format_search_results
from .transcript import TranscriptLine, normalize_transcript, transcript_as_text
from .video import video_transcript
from .websearch import web_search

__all__ = [
    "AggregateRequest",
    "InvalidVideo",
    "InvidiousClient",
    "MissingParameter",
    "NoCaptions",
    "NoFields",
    "NoTarget",
    "Outcome",
    "Settings",
    "StreamLink",
    "StreamLinkSet",
    "TranscriptLine",
    "TranscriptParseError",
    "TubeBridgeError",
    "UnrecognizedFormat",
    "UpstreamNotFound",
    "UpstreamUnavailable",
    "WebSearchNotConfigured",
    "aggregate",
    "analyze_search",
    "build_stream_links",
    "format_search_results",
    "load_settings",
    "normalize_transcript",
    "render_video_report",
    "settle",
    "settle_all",
    "stream_url",
    "transcript_as_text",
    "video_transcript",
    "web_search",
]
