from __future__ import annotations

import datetime

from news_watch.core.config import MAX_AGE_MINUTES, MAX_DISCREPANCY_MINUTES
from news_watch.core.constants import (
    REASON_FUTURE_DATED,
    REASON_MALFORMED_TIMESTAMP,
    REASON_TIME_INCONSISTENT,
    REASON_TOO_OLD,
)
from news_watch.processing.types import RawCandidate, Verdict
from news_watch.utils import minutes_between, parse_datetime_utc


class FreshnessValidator:
    def __init__(
        self,
        *,
        max_age_minutes: float = MAX_AGE_MINUTES,
        max_discrepancy_minutes: float = MAX_DISCREPANCY_MINUTES,
    ) -> None:
        self._max_age_minutes = max_age_minutes
        self._max_discrepancy_minutes = max_discrepancy_minutes

    def validate(self, candidate: RawCandidate, now: datetime.datetime) -> Verdict:
        # 규칙은 순서대로 평가하고 첫 실패에서 멈춘다
        published = parse_datetime_utc(candidate.publish_time)
        server_seen = parse_datetime_utc(candidate.server_timestamp)
        if published is None or server_seen is None:
            bad = "publishTime" if published is None else "serverTimestamp"
            return Verdict.reject(REASON_MALFORMED_TIMESTAMP, f"unparseable {bad}")

        age = minutes_between(_as_utc(now), published)
        if age > self._max_age_minutes:
            return Verdict.reject(REASON_TOO_OLD, f"age {age:.1f} mins")
        if age < 0:
            return Verdict.reject(REASON_FUTURE_DATED, f"{-age:.1f} mins ahead")

        # 게시 시각과 서버 관측 시각의 차이는 방향과 무관하게 본다
        discrepancy = abs(minutes_between(published, server_seen))
        if discrepancy > self._max_discrepancy_minutes:
            return Verdict.reject(REASON_TIME_INCONSISTENT, f"discrepancy {discrepancy:.1f} mins")
        return Verdict.accept()


def _as_utc(now: datetime.datetime) -> datetime.datetime:
    if now.tzinfo is None:
        return now.replace(tzinfo=datetime.timezone.utc)
    return now.astimezone(datetime.timezone.utc)
