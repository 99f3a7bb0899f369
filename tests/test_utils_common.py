import datetime

from news_watch.utils import clean_text, parse_datetime_utc, title_prefix


def test_clean_text_strips_html_and_ws() -> None:
    assert clean_text("  hello&nbsp;<b>world</b>\n") == "hello world"


def test_parse_datetime_utc_handles_offsets_and_zulu() -> None:
    expected = datetime.datetime(2024, 5, 1, 9, 0, tzinfo=datetime.timezone.utc)
    assert parse_datetime_utc("2024-05-01T12:00:00+03:00") == expected
    assert parse_datetime_utc("2024-05-01T09:00:00Z") == expected
    assert parse_datetime_utc("2024-05-01T09:00:00.000Z") == expected
    assert parse_datetime_utc("Wed, 01 May 2024 09:00:00 GMT") == expected


def test_parse_datetime_utc_rejects_garbage() -> None:
    assert parse_datetime_utc("") is None
    assert parse_datetime_utc("   ") is None
    assert parse_datetime_utc("soon") is None
    assert parse_datetime_utc(None) is None


def test_title_prefix_collapses_whitespace_and_truncates() -> None:
    assert title_prefix("  breaking:\n  news   from the port area ", 20) == "breaking: news from "
    assert title_prefix("", 20) == ""


def test_parse_datetime_utc_out_of_range_offset_is_none() -> None:
    assert parse_datetime_utc("0001-01-01T00:00:00+05:00") is None
    assert parse_datetime_utc("9999-12-31T23:00:00-05:00") is None
