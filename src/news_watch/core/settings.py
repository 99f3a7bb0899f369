from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from news_watch.core.config import (
    DEFAULT_REFRESH_INTERVAL,
    REFRESH_INTERVAL_MAX,
    REFRESH_INTERVAL_MIN,
)
from news_watch.core.constants import (
    DEFAULT_KEYWORDS,
    DEFAULT_TELEGRAM_SOURCES,
    DEFAULT_WEB_SOURCES,
)
from news_watch.models import SettingsPayload


def clamp_refresh_interval(value: Any) -> int:
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        minutes = DEFAULT_REFRESH_INTERVAL
    return max(REFRESH_INTERVAL_MIN, min(REFRESH_INTERVAL_MAX, minutes))


def _str_list(value: Any, default: list[str]) -> list[str]:
    if not isinstance(value, list):
        return list(default)
    return [str(x).strip() for x in value if str(x).strip()]


@dataclass(frozen=True)
class TrackerSettings:
    web_sources: list[str] = field(default_factory=lambda: list(DEFAULT_WEB_SOURCES))
    telegram_sources: list[str] = field(default_factory=lambda: list(DEFAULT_TELEGRAM_SOURCES))
    keywords: list[str] = field(default_factory=lambda: list(DEFAULT_KEYWORDS))
    refresh_interval_minutes: int = DEFAULT_REFRESH_INTERVAL
    last_updated: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "refresh_interval_minutes",
            clamp_refresh_interval(self.refresh_interval_minutes),
        )

    def stamped(self, last_updated: str) -> "TrackerSettings":
        return dataclasses.replace(self, last_updated=last_updated)

    def to_dict(self) -> SettingsPayload:
        return {
            "webSources": list(self.web_sources),
            "telegramSources": list(self.telegram_sources),
            "keywords": list(self.keywords),
            "refreshInterval": self.refresh_interval_minutes,
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "TrackerSettings":
        if not isinstance(data, dict):
            return cls()
        return cls(
            web_sources=_str_list(data.get("webSources"), DEFAULT_WEB_SOURCES),
            telegram_sources=_str_list(data.get("telegramSources"), DEFAULT_TELEGRAM_SOURCES),
            keywords=_str_list(data.get("keywords"), DEFAULT_KEYWORDS),
            refresh_interval_minutes=clamp_refresh_interval(
                data.get("refreshInterval", DEFAULT_REFRESH_INTERVAL)
            ),
            last_updated=str(data.get("lastUpdated") or ""),
        )
