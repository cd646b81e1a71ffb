from __future__ import annotations

from typing import Any, Dict, Mapping

from .aggregate import settle_all
from .client import InvidiousClient
from .formatting import format_date
from .transcript import transcript_as_text

METADATA_FIELDS = {
    "title": "title",
    "author": "author",
    "channelId": "authorId",
    "lengthSeconds": "lengthSeconds",
    "viewCount": "viewCount",
    "likeCount": "likeCount",
    "description": "description",
}


def video_metadata(video_id: str, details: Mapping[str, Any]) -> Dict[str, Any]:
    meta: Dict[str, Any] = {"videoId": details.get("videoId") or video_id}
    for key, source in METADATA_FIELDS.items():
        meta[key] = details.get(source)
    meta["published"] = format_date(details.get("published"))
    return meta


async def video_transcript(client: InvidiousClient, video_id: str, *, as_segments: bool = False) -> Dict[str, Any]:
    """Video metadata merged with its transcript.

    The details call is mandatory and its error propagates as-is, as does a
    transcript failure (``NoCaptions`` / ``UnrecognizedFormat``) since the
    transcript is the point of the call.
    """

    details_outcome, transcript_outcome = await settle_all(
        [client.video_details(video_id), client.transcript(video_id)]
    )
    if not details_outcome.ok:
        raise details_outcome.error
    if not transcript_outcome.ok:
        raise transcript_outcome.error

    payload = video_metadata(video_id, details_outcome.value or {})
    lines = transcript_outcome.value or []
    if as_segments:
        payload["segments"] = [{"text": line.text, "start": line.start_seconds} for line in lines]
    else:
        payload["transcript"] = transcript_as_text(lines)
    return payload
