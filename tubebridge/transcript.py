"""Normalise caption payloads into an ordered list of transcript lines.

Upstreams hand back captions in several loosely specified shapes: raw WebVTT
text, JSON objects wrapping the cue list under ``captions`` or ``lines``, a
bare JSON list, or YouTube's timedtext XML. ``normalize_transcript`` tries a
fixed, ordered list of matchers; the first one that recognises the payload
wins and an exhausted list raises :class:`UnrecognizedFormat`.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from lxml import etree

from .errors import TranscriptParseError, UnrecognizedFormat

_ARROW = "-->"
_TIMESTAMP_RE = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{1,2})\.(\d{1,3})$")


@dataclass(frozen=True)
class TranscriptLine:
    start_ms: float
    text: str

    @property
    def start_seconds(self) -> float:
        return self.start_ms / 1000

    def as_dict(self) -> Dict[str, Any]:
        return {"start": self.start_ms, "text": self.text}


def parse_timestamp(value: str) -> float:
    """Convert ``H:MM:SS.mmm`` or ``MM:SS.mmm`` to milliseconds."""

    match = _TIMESTAMP_RE.match(value.strip())
    if not match:
        raise TranscriptParseError(f"Malformed caption timestamp: {value.strip()!r}")
    hours, minutes, seconds, fraction = match.groups()
    total = int(hours or 0) * 3600 + int(minutes) * 60 + int(seconds) + int(fraction.ljust(3, "0")) / 1000
    return round(total * 1000, 3)


def _from_webvtt(raw: Any) -> Optional[List[TranscriptLine]]:
    if not isinstance(raw, str) or _ARROW not in raw:
        return None
    rows = raw.splitlines()
    lines: List[TranscriptLine] = []
    i = 0
    while i < len(rows):
        row = rows[i]
        if _ARROW not in row:
            i += 1
            continue
        start_ms = parse_timestamp(row.split(_ARROW, 1)[0])
        j = i + 1
        parts: List[str] = []
        while j < len(rows) and rows[j].strip():
            parts.append(rows[j].strip())
            j += 1
        lines.append(TranscriptLine(start_ms=start_ms, text=" ".join(parts).strip()))
        # j sits on the blank separator (or past the end); skip it
        i = j + 1
    return lines


def _coerce_ms(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _from_entries(entries: Iterable[Any]) -> List[TranscriptLine]:
    lines: List[TranscriptLine] = []
    for item in entries:
        if not isinstance(item, Mapping):
            continue
        start = item.get("start")
        if start is None:
            start = item.get("offset")
        text = item.get("text")
        lines.append(TranscriptLine(start_ms=_coerce_ms(start), text=str(text) if text is not None else ""))
    return lines


def _from_keyed_list(key: str) -> Callable[[Any], Optional[List[TranscriptLine]]]:
    def matcher(raw: Any) -> Optional[List[TranscriptLine]]:
        if isinstance(raw, Mapping) and isinstance(raw.get(key), list):
            return _from_entries(raw[key])
        return None

    matcher.__name__ = f"_from_{key}"
    return matcher


def _from_list(raw: Any) -> Optional[List[TranscriptLine]]:
    if isinstance(raw, list):
        return _from_entries(raw)
    return None


def _from_timedtext(raw: Any) -> Optional[List[TranscriptLine]]:
    if not isinstance(raw, str) or "<text" not in raw:
        return None
    parser = etree.XMLParser(recover=True)
    root = etree.fromstring(raw.encode("utf-8"), parser=parser)
    if root is None:
        return None
    lines: List[TranscriptLine] = []
    for node in root.iter("text"):
        start = _coerce_ms(node.get("start")) * 1000
        text = html.unescape("".join(node.itertext())).replace("\n", " ").strip()
        lines.append(TranscriptLine(start_ms=start, text=text))
    return lines


MATCHERS: List[Callable[[Any], Optional[List[TranscriptLine]]]] = [
    _from_webvtt,
    _from_keyed_list("captions"),
    _from_keyed_list("lines"),
    _from_list,
    _from_timedtext,
]


def normalize_transcript(raw: Any) -> List[TranscriptLine]:
    for matcher in MATCHERS:
        lines = matcher(raw)
        if lines is not None:
            return lines
    raise UnrecognizedFormat("Could not parse transcript from the received data.")


def transcript_as_text(lines: Iterable[TranscriptLine]) -> str:
    """Join transcript lines into a single flat string."""

    return " ".join(line.text.strip() for line in lines if line.text.strip())
