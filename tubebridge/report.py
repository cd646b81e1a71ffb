"""Plain-text video report intended to be pasted into an LLM prompt.

Only the video details are mandatory. Comments and the transcript are fetched
alongside them and degrade to placeholder text when they fail; the channel
lookup depends on ``authorId`` from the details and is best-effort.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

from .aggregate import Outcome, settle, settle_all
from .client import InvidiousClient
from .formats import StreamLink, StreamLinkSet, build_stream_links
from .formatting import NA, format_date, format_number, format_timestamp
from .transcript import TranscriptLine

LOGGER = logging.getLogger("tubebridge.report")

FATAL_PREFIX = "Fatal Error:"
NO_TRANSCRIPT = "Transcript not available."
NO_COMMENTS = "No comments available or failed to fetch."
NO_DESCRIPTION = "No description provided."
NO_LINKS = "Download links could not be generated."


def render_transcript(lines: Sequence[TranscriptLine]) -> str:
    if not lines:
        return NO_TRANSCRIPT
    return "\n".join(f"({format_timestamp(line.start_seconds)}) {line.text.strip()}" for line in lines)


def top_comments(comments: Iterable[Mapping[str, Any]], limit: int) -> List[Mapping[str, Any]]:
    # sorted() is stable, so equal like counts keep their original order
    ranked = sorted(
        (c for c in comments if isinstance(c, Mapping)),
        key=lambda c: c.get("likeCount") or 0,
        reverse=True,
    )
    return ranked[:limit]


def render_comments(payload: Any, limit: int) -> str:
    comments = payload.get("comments") if isinstance(payload, Mapping) else None
    if not isinstance(comments, list) or not comments:
        return NO_COMMENTS
    rows = []
    for comment in top_comments(comments, limit):
        author = comment.get("author") or "Anonymous"
        content = (comment.get("content") or "").strip()
        rows.append(f"- **{author}** ({format_number(comment.get('likeCount'))} likes): {content}")
    return "\n".join(rows) or NO_COMMENTS


def _link_section(title: str, links: List[StreamLink]) -> str:
    if not links:
        return ""
    rows = "\n".join(f"- {link.quality} ({link.container or NA}): {link.url}" for link in links)
    return f"\n**{title}:**\n{rows}"


def render_links(links: StreamLinkSet) -> str:
    text = (
        _link_section("Video + Audio", links.combined)
        + _link_section("Video Only", links.videoOnly)
        + _link_section("Audio Only", links.audioOnly)
    )
    return text or f"\n{NO_LINKS}"


def compose_report(
    details: Mapping[str, Any],
    channel: Mapping[str, Any],
    transcript_text: str,
    comments_text: str,
    links_text: str,
    comment_limit: int,
) -> str:
    description = (details.get("description") or "").strip() or NO_DESCRIPTION
    sections = [
        "**YouTube Video Analysis Report**",
        "\n".join(
            [
                "**1. Basic Information:**",
                f"- **Title:** {details.get('title') or NA}",
                f"- **Views:** {format_number(details.get('viewCount'))}",
                f"- **Likes:** {format_number(details.get('likeCount'))}",
                f"- **Uploaded On:** {format_date(details.get('published'))}",
            ]
        ),
        "\n".join(
            [
                "**2. Channel Details:**",
                f"- **Channel Name:** {details.get('author') or NA}",
                f"- **Subscribers:** {format_number(channel.get('subCount'))}",
                f"- **Channel ID:** {details.get('authorId') or NA}",
            ]
        ),
        f"**3. Video Description:**\n{description}",
        f"**4. Video Transcript (What is being said):**\n{transcript_text}",
        f"**5. Public Opinion (Top {comment_limit} Comments):**\n{comments_text}",
        f"**6. Download & Stream Links:**{links_text}",
        "**--- End of Report ---**",
    ]
    return "\n\n".join(sections).strip()


async def _channel_for(client: InvidiousClient, details: Mapping[str, Any]) -> Dict[str, Any]:
    author_id = details.get("authorId")
    if not author_id:
        return {}
    outcome: Outcome[Dict[str, Any]] = await settle(client.channel(author_id))
    if not outcome.ok:
        LOGGER.warning("channel lookup for %s failed: %s", author_id, outcome.error_message)
    channel = outcome.value_or({})
    return channel if isinstance(channel, dict) else {}


async def _details_and_channel(
    client: InvidiousClient, video_id: str
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    # the channel lookup starts as soon as details resolve, not after the siblings
    details = await client.video_details(video_id)
    if not isinstance(details, dict):
        details = {}
    return details, await _channel_for(client, details)


async def render_video_report(client: InvidiousClient, video_id: str, top_n: int = 20) -> str:
    primary_outcome, comments_outcome, transcript_outcome = await settle_all(
        [_details_and_channel(client, video_id), client.comments(video_id), client.transcript(video_id)]
    )
    if not primary_outcome.ok:
        reason = str(primary_outcome.error or "") or "Could not fetch video details"
        return f"{FATAL_PREFIX} {reason}"
    details, channel = primary_outcome.value

    if transcript_outcome.ok:
        transcript_text = render_transcript(transcript_outcome.value or [])
    else:
        LOGGER.info("transcript unavailable for %s: %s", video_id, transcript_outcome.error_message)
        transcript_text = NO_TRANSCRIPT

    comments_text = render_comments(comments_outcome.value, top_n) if comments_outcome.ok else NO_COMMENTS
    links_text = render_links(build_stream_links(client.settings, details, video_id))

    return compose_report(details, channel, transcript_text, comments_text, links_text, top_n)
