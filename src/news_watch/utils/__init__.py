from .common import clean_text, clean_text_ws, minutes_between, parse_datetime_utc, title_prefix

__all__ = [
    "clean_text",
    "clean_text_ws",
    "minutes_between",
    "parse_datetime_utc",
    "title_prefix",
]
