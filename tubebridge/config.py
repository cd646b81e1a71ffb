from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_INVIDIOUS_BASE_URL = "https://inv.perditum.com"
DEFAULT_API_PATH = "/api/v1"
DEFAULT_RAPIDAPI_HOST = "perplexity2.p.rapidapi.com"


def _optional_float(name: str) -> Optional[float]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _int_env(name: str, default: int) -> int:
    try:
        return max(1, int(os.getenv(name, str(default))))
    except ValueError:
        return default


@dataclass
class Settings:
    """Runtime configuration resolved from the environment."""

    base_url: str = field(
        default_factory=lambda: (os.getenv("INVIDIOUS_BASE_URL") or DEFAULT_INVIDIOUS_BASE_URL).rstrip("/")
    )
    api_path: str = field(default_factory=lambda: os.getenv("INVIDIOUS_API_PATH") or DEFAULT_API_PATH)
    # None keeps httpx's own default timeout.
    upstream_timeout: Optional[float] = field(default_factory=lambda: _optional_float("TUBEBRIDGE_UPSTREAM_TIMEOUT"))
    report_top_comments: int = field(default_factory=lambda: _int_env("TUBEBRIDGE_REPORT_TOP_COMMENTS", 20))
    static_dir: str = field(default_factory=lambda: os.getenv("TUBEBRIDGE_STATIC_DIR", "public"))
    rapidapi_key: Optional[str] = field(default_factory=lambda: (os.getenv("RAPIDAPI_KEY") or "").strip() or None)
    rapidapi_host: str = field(default_factory=lambda: os.getenv("RAPIDAPI_HOST") or DEFAULT_RAPIDAPI_HOST)
    port: int = field(default_factory=lambda: _int_env("PORT", 3000))

    @property
    def api_base(self) -> str:
        return f"{self.base_url}/{self.api_path.strip('/')}"

    @property
    def rapidapi_url(self) -> str:
        return f"https://{self.rapidapi_host}/"


def load_settings() -> Settings:
    return Settings()
