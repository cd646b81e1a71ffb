from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import Settings
from .errors import InvalidVideo, NoCaptions, UpstreamNotFound, UpstreamUnavailable
from .formats import stream_url
from .transcript import TranscriptLine, normalize_transcript

LOGGER = logging.getLogger("tubebridge.client")


class InvidiousClient:
    """Thin async wrapper around the Invidious REST API.

    Every method performs a single GET (the transcript performs two, the
    second one using the track path returned by the first). Nothing is
    retried; a failed call raises and the caller decides what it means.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        kwargs: Dict[str, Any] = {"follow_redirects": True}
        if settings.upstream_timeout is not None:
            kwargs["timeout"] = settings.upstream_timeout
        if transport is not None:
            kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        LOGGER.debug("GET %s params=%s", url, params)
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamUnavailable(f"Upstream request to {url} failed: {exc}") from exc
        if response.status_code == 404:
            raise UpstreamNotFound(f"Upstream returned 404 for {url}")
        if response.status_code >= 400:
            raise UpstreamUnavailable(f"Request failed with status code {response.status_code}")
        return response

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = await self._get(f"{self.settings.api_base}{path}", params=params)
        try:
            return response.json()
        except json.JSONDecodeError as exc:
            raise UpstreamUnavailable(f"Upstream returned invalid JSON for {path}") from exc

    async def video_details(self, video_id: str) -> Dict[str, Any]:
        data = await self._get_json(f"/videos/{video_id}")
        if isinstance(data, dict) and data.get("error"):
            raise InvalidVideo(str(data["error"]))
        return data

    async def comments(self, video_id: str) -> Dict[str, Any]:
        return await self._get_json(f"/comments/{video_id}")

    async def channel(self, channel_id: str) -> Dict[str, Any]:
        return await self._get_json(f"/authors/{channel_id}")

    async def search(self, query: str) -> List[Dict[str, Any]]:
        return await self._get_json("/search", params={"q": query})

    async def caption_tracks(self, video_id: str) -> List[Dict[str, Any]]:
        data = await self._get_json(f"/videos/{video_id}", params={"fields": "captions"})
        tracks = data.get("captions") if isinstance(data, dict) else None
        return tracks if isinstance(tracks, list) else []

    async def transcript(self, video_id: str) -> List[TranscriptLine]:
        tracks = await self.caption_tracks(video_id)
        if not tracks:
            raise NoCaptions("No captions available for this video.")
        path = tracks[0].get("url") or ""
        response = await self._get(f"{self.settings.base_url}{path}")
        return normalize_transcript(_decode_body(response))

    async def open_stream(self, video_id: str, itag: str) -> httpx.Response:
        """Open a streaming download; the caller must close the response."""

        url = stream_url(self.settings, video_id, itag, local=False)
        LOGGER.debug("STREAM %s", url)
        request = self._client.build_request("GET", url)
        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise UpstreamUnavailable(f"Upstream stream request failed: {exc}") from exc
        if response.status_code >= 400:
            await response.aclose()
            if response.status_code == 404:
                raise UpstreamNotFound(f"Upstream returned 404 for {url}")
            raise UpstreamUnavailable(f"Request failed with status code {response.status_code}")
        return response


def _decode_body(response: httpx.Response) -> Any:
    """Return decoded JSON when the body is JSON, otherwise the raw text."""

    content_type = response.headers.get("content-type", "")
    text = response.text
    if "json" in content_type or text.lstrip().startswith(("{", "[")):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return text
    return text
