from __future__ import annotations

import datetime

import pytest

from news_watch.processing.freshness import FreshnessValidator
from news_watch.processing.types import RawCandidate

NOW = datetime.datetime(2024, 5, 1, 12, 0, tzinfo=datetime.timezone.utc)


def _at(minutes_ago: float) -> str:
    return (NOW - datetime.timedelta(minutes=minutes_ago)).isoformat()


def _validate(publish: str, server: str) -> tuple[bool, str]:
    verdict = FreshnessValidator(max_age_minutes=120, max_discrepancy_minutes=10).validate(
        RawCandidate(title="t", publish_time=publish, server_timestamp=server),
        NOW,
    )
    return verdict.accepted, verdict.reason_code


@pytest.mark.parametrize("minutes_ago", [0, 3, 60, 120])
def test_age_window_admits_inclusive_bounds(minutes_ago: float) -> None:
    assert _validate(_at(minutes_ago), _at(minutes_ago)) == (True, "")


def test_age_over_limit_is_too_old() -> None:
    assert _validate(_at(120.5), _at(120.5)) == (False, "TooOld")


def test_future_publish_time_is_rejected() -> None:
    assert _validate(_at(-1), _at(-1)) == (False, "FutureDated")


def test_discrepancy_boundary_admits() -> None:
    assert _validate(_at(15), _at(5)) == (True, "")


@pytest.mark.parametrize("server_offset", [11, -11])
def test_discrepancy_over_limit_in_either_direction(server_offset: float) -> None:
    # 서버 시각이 게시 시각보다 앞서든 뒤서든 절대값으로 판단
    assert _validate(_at(30), _at(30 + server_offset)) == (False, "TimeInconsistent")


@pytest.mark.parametrize(
    "publish, server",
    [("", _at(1)), ("yesterday-ish", _at(1)), (_at(1), ""), (_at(1), "not a date")],
)
def test_unparseable_timestamps_are_malformed(publish: str, server: str) -> None:
    assert _validate(publish, server) == (False, "MalformedTimestamp")


@pytest.mark.parametrize(
    "publish",
    ["0001-01-01T00:00:00+05:00", "9999-12-31T23:00:00-05:00"],
)
def test_timestamps_outside_datetime_range_are_malformed(publish: str) -> None:
    # UTC로 옮기면 datetime 범위를 벗어나는 값
    assert _validate(publish, _at(1)) == (False, "MalformedTimestamp")
    assert _validate(_at(1), publish) == (False, "MalformedTimestamp")


def test_malformed_wins_over_too_old() -> None:
    assert _validate(_at(500), "???") == (False, "MalformedTimestamp")


def test_too_old_wins_over_discrepancy() -> None:
    assert _validate(_at(500), _at(1)) == (False, "TooOld")


def test_zulu_and_naive_timestamps_are_read_as_utc() -> None:
    assert _validate("2024-05-01T11:57:00Z", "2024-05-01T11:57:00") == (True, "")


def test_naive_now_is_treated_as_utc() -> None:
    verdict = FreshnessValidator().validate(
        RawCandidate(publish_time=_at(3), server_timestamp=_at(3)),
        NOW.replace(tzinfo=None),
    )
    assert verdict.accepted is True
