"""Settle-all fan-out over the upstream client.

Every enabled field is fetched concurrently and the aggregator waits for all
of them, successful or not, before composing the response. A failing field
turns into an inline error descriptor; it never discards its siblings.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Generic, Iterable, List, Optional, TypeVar

from .client import InvidiousClient
from .errors import NoFields, NoTarget

LOGGER = logging.getLogger("tubebridge.aggregate")

T = TypeVar("T")

CHANNEL_FIELD = "channel"
SEARCH_FIELD = "search_results"


@dataclass
class Outcome(Generic[T]):
    """Settled result of one asynchronous call."""

    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or(self, default: T) -> T:
        if self.ok and self.value is not None:
            return self.value
        return default

    @property
    def error_message(self) -> str:
        if self.error is None:
            return ""
        return str(self.error) or "Unknown error"


async def settle(awaitable: Awaitable[T]) -> Outcome[T]:
    (outcome,) = await settle_all([awaitable])
    return outcome


async def settle_all(awaitables: Iterable[Awaitable[Any]]) -> List[Outcome[Any]]:
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    outcomes: List[Outcome[Any]] = []
    for result in results:
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, BaseException):
            outcomes.append(Outcome(error=result))
        else:
            outcomes.append(Outcome(value=result))
    return outcomes


@dataclass
class AggregateRequest:
    video_id: Optional[str] = None
    channel_id: Optional[str] = None
    query: Optional[str] = None
    fields: List[str] = field(default_factory=list)

    @classmethod
    def from_params(
        cls,
        video_id: Optional[str],
        channel_id: Optional[str],
        query: Optional[str],
        fields: Optional[str],
    ) -> "AggregateRequest":
        parsed = [name.strip() for name in (fields or "").split(",") if name.strip()]
        return cls(video_id=video_id or None, channel_id=channel_id or None, query=query or None, fields=parsed)

    def has_target(self) -> bool:
        return bool(self.video_id or self.channel_id or self.query)


def _plan(client: InvidiousClient, request: AggregateRequest) -> Dict[str, Callable[[], Awaitable[Any]]]:
    wanted = set(request.fields)
    plan: Dict[str, Callable[[], Awaitable[Any]]] = {}
    if request.video_id:
        video_id = request.video_id
        if "details" in wanted:
            plan["details"] = lambda: client.video_details(video_id)
        if "comments" in wanted:
            plan["comments"] = lambda: client.comments(video_id)
        if "transcript" in wanted:
            plan["transcript"] = lambda: _transcript_payload(client, video_id)
    if request.channel_id and CHANNEL_FIELD in wanted:
        channel_id = request.channel_id
        plan[CHANNEL_FIELD] = lambda: client.channel(channel_id)
    if request.query and SEARCH_FIELD in wanted:
        query = request.query
        plan[SEARCH_FIELD] = lambda: client.search(query)
    return plan


async def _transcript_payload(client: InvidiousClient, video_id: str) -> List[Dict[str, Any]]:
    lines = await client.transcript(video_id)
    return [line.as_dict() for line in lines]


def error_descriptor(name: str, outcome: Outcome[Any]) -> Dict[str, str]:
    return {"error": f"Failed to fetch {name}", "details": outcome.error_message}


async def aggregate(client: InvidiousClient, request: AggregateRequest) -> Dict[str, Any]:
    if not request.has_target():
        raise NoTarget("An 'id', 'channel', or 'search' parameter is required.")
    plan = _plan(client, request)
    if not plan:
        raise NoFields("No valid fields or parameters provided.")

    names = list(plan)
    outcomes = await settle_all(plan[name]() for name in names)

    result: Dict[str, Any] = {}
    for name, outcome in zip(names, outcomes):
        if outcome.ok:
            result[name] = outcome.value
        else:
            LOGGER.warning("fetch %s failed: %s", name, outcome.error_message)
            result[name] = error_descriptor(name, outcome)
    return result
