from __future__ import annotations

from typing import Any, Callable, Dict, List, Union

import httpx
import pytest

from tubebridge.client import InvidiousClient
from tubebridge.config import Settings

Route = Union[httpx.Response, Callable[[httpx.Request], Any]]


class MediaBody(httpx.AsyncByteStream):
    """Async body that is only read when iterated, like a live download."""

    def __init__(self, *chunks: bytes) -> None:
        self.chunks = chunks

    async def __aiter__(self):
        for chunk in self.chunks:
            yield chunk


class FakeUpstream:
    """Route table for ``httpx.MockTransport`` keyed by raw path + query."""

    def __init__(self) -> None:
        self.routes: Dict[str, Route] = {}
        self.calls: List[str] = []

    def add(self, path: str, route: Route) -> None:
        self.routes[path] = route

    def json(self, path: str, payload: Any, status: int = 200) -> None:
        self.add(path, lambda request: httpx.Response(status, json=payload))

    def text(self, path: str, body: str, status: int = 200, content_type: str = "text/vtt") -> None:
        self.add(path, lambda request: httpx.Response(status, text=body, headers={"content-type": content_type}))

    def media(self, path: str, body: bytes, content_type: str, **headers: str) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            sent = {"content-type": content_type, "content-length": str(len(body))}
            sent.update({name.replace("_", "-"): value for name, value in headers.items()})
            return httpx.Response(200, headers=sent, stream=MediaBody(body[:2], body[2:]))

        self.add(path, respond)

    def fail(self, path: str, status: int = 500) -> None:
        self.add(path, lambda request: httpx.Response(status, json={"error": "boom"}))

    async def handler(self, request: httpx.Request) -> httpx.Response:
        key = request.url.raw_path.decode()
        self.calls.append(key)
        route = self.routes.get(key)
        if route is None:
            return httpx.Response(404, json={"error": f"no route for {key}"})
        result = route(request) if callable(route) else route
        if hasattr(result, "__await__"):
            result = await result
        return result


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        base_url="http://inv.test",
        api_path="/api/v1",
        upstream_timeout=None,
        report_top_comments=20,
        static_dir=str(tmp_path / "public"),
        rapidapi_key=None,
        port=3000,
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def client(settings: Settings, upstream: FakeUpstream) -> InvidiousClient:
    return InvidiousClient(settings, transport=httpx.MockTransport(upstream.handler))


VTT_BODY = (
    "WEBVTT\n"
    "Kind: captions\n"
    "Language: en\n"
    "\n"
    "1\n"
    "00:00:01.000 --> 00:00:03.000\n"
    "Hello there\n"
    "\n"
    "2\n"
    "00:01:05.500 --> 00:01:07.000\n"
    "General\n"
    "Kenobi\n"
    "\n"
)


def video_details(video_id: str = "abc123", **overrides: Any) -> Dict[str, Any]:
    details: Dict[str, Any] = {
        "videoId": video_id,
        "title": "A Video",
        "viewCount": 1234567,
        "likeCount": 4321,
        "published": 1700000000,
        "author": "Some Channel",
        "authorId": "UC123",
        "description": "  A description.  ",
        "lengthSeconds": 3725,
        "formatStreams": [
            {"qualityLabel": "360p", "itag": "18", "container": "mp4", "type": "video/mp4; codecs=\"avc1\""},
        ],
        "adaptiveFormats": [
            {"qualityLabel": "1080p", "itag": "137", "container": "mp4", "type": "video/mp4", "bitrate": "4000000"},
            {"itag": "140", "container": "m4a", "type": "audio/mp4", "bitrate": "129725"},
        ],
    }
    details.update(overrides)
    return details


def install_video(upstream: FakeUpstream, video_id: str = "abc123", **overrides: Any) -> None:
    """Register details, comments, captions and a WebVTT track for one video."""

    upstream.json(f"/api/v1/videos/{video_id}", video_details(video_id, **overrides))
    upstream.json(
        f"/api/v1/comments/{video_id}",
        {
            "comments": [
                {"author": "low", "content": "meh", "likeCount": 1},
                {"author": "first-tie", "content": " great ", "likeCount": 50},
                {"author": None, "content": "anon", "likeCount": 2000},
                {"author": "second-tie", "content": "also great", "likeCount": 50},
            ]
        },
    )
    upstream.json(
        f"/api/v1/videos/{video_id}?fields=captions",
        {"captions": [{"label": "English", "language_code": "en", "url": f"/api/v1/captions/{video_id}?label=English"}]},
    )
    upstream.text(f"/api/v1/captions/{video_id}?label=English", VTT_BODY)
    upstream.json("/api/v1/authors/UC123", {"author": "Some Channel", "subCount": 98765})
