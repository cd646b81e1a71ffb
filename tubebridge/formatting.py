from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from dateutil import parser as date_parser

NA = "N/A"


def _as_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else value
    try:
        return float(str(value).replace(",", ""))
    except ValueError:
        return None


def format_number(value: Any) -> str:
    """Render with thousands separators, ``N/A`` when missing."""

    number = _as_number(value)
    if number is None:
        return NA
    if float(number).is_integer():
        return f"{int(number):,}"
    return f"{number:,.3f}".rstrip("0").rstrip(".")


def format_date(value: Any) -> str:
    """Render an ISO date string or unix timestamp as ``YYYY-MM-DD``."""

    if value is None or value == "" or isinstance(value, bool):
        return NA
    try:
        if isinstance(value, (int, float)):
            parsed = datetime.fromtimestamp(value, tz=timezone.utc)
        else:
            parsed = date_parser.isoparse(str(value))
    except (ValueError, TypeError, OverflowError, OSError):
        return NA
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date().isoformat()


def _clock(total_seconds: int) -> str:
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_timestamp(seconds: Any) -> str:
    number = _as_number(seconds)
    if number is None:
        return "00:00"
    return _clock(int(math.floor(max(number, 0))))


def format_duration(seconds: Any) -> str:
    number = _as_number(seconds)
    if number is None:
        return NA
    total = int(number)
    if total < 60:
        return f"{total} seconds"
    return _clock(total)
