"""Runtime settings.

Configuration via environment variables:

- OSM_CATALOG_BASE_URL (default: https://download.geofabrik.de/)
- OSM_CATALOG_USER_AGENT
- OSM_CATALOG_HTTP_TIMEOUT (seconds, default: 20)
- OSM_CATALOG_MAX_WORKERS (sub-listing fetch workers, default: 4)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_BASE_URL = "https://download.geofabrik.de/"
DEFAULT_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:109.0) Gecko/20100101 Firefox/117.0"


def _env_number(env: Mapping[str, str], key: str, default, cast):
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    http_timeout: float = 20.0
    max_workers: int = 4

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        max_workers = _env_number(env, "OSM_CATALOG_MAX_WORKERS", cls.max_workers, int)
        if max_workers < 1:
            raise ValueError(f"OSM_CATALOG_MAX_WORKERS must be >= 1, got {max_workers}")
        return cls(
            base_url=env.get("OSM_CATALOG_BASE_URL") or DEFAULT_BASE_URL,
            user_agent=env.get("OSM_CATALOG_USER_AGENT") or DEFAULT_USER_AGENT,
            http_timeout=_env_number(env, "OSM_CATALOG_HTTP_TIMEOUT", cls.http_timeout, float),
            max_workers=max_workers,
        )


_settings_cache: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings_cache
    if _settings_cache is None:
        _settings_cache = Settings.from_env()
    return _settings_cache
