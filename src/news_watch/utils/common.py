from __future__ import annotations

import datetime
import email.utils
import html
import re

_WS_RE = re.compile(r"\s+")  # 공백 정리 시 연속 공백을 단일 공백으로 축약
_ZULU_RE = re.compile(r"[zZ]$")  # 3.10 이하 fromisoformat이 읽지 못하는 'Z' 접미사


def clean_text(s: str) -> str:
    """HTML 엔티티/태그를 제거하고 공백을 정리한 깔끔한 텍스트로 정규화."""
    if not s:
        return ""
    s = html.unescape(s)
    s = s.replace("\u00a0", " ")
    s = re.sub(r"<[^>]+>", "", s)
    s = _WS_RE.sub(" ", s).strip()
    return s


def clean_text_ws(text: str) -> str:
    return _WS_RE.sub(" ", (text or "").strip())


def parse_datetime_utc(value: str, *, default_tz: datetime.tzinfo | None = None) -> datetime.datetime | None:
    """ISO-8601 또는 RFC-2822 문자열을 UTC datetime으로 변환. 실패 시 None."""
    if not value or not isinstance(value, str):
        return None
    raw = value.strip()
    if not raw:
        return None
    try:
        dt = datetime.datetime.fromisoformat(_ZULU_RE.sub("+00:00", raw))
    except Exception:
        try:
            dt = email.utils.parsedate_to_datetime(raw)
        except Exception:
            return None
    if dt is None:
        return None
    try:
        if dt.tzinfo is None:
            # 오프셋 없는 시각은 UTC로 간주
            dt = dt.replace(tzinfo=default_tz or datetime.timezone.utc)
        # 0001-01-01+05:00 처럼 UTC 변환 시 범위를 벗어나는 값
        return dt.astimezone(datetime.timezone.utc)
    except (OverflowError, ValueError):
        return None


def minutes_between(later: datetime.datetime, earlier: datetime.datetime) -> float:
    return (later - earlier).total_seconds() / 60.0


def title_prefix(title: str, limit: int = 20) -> str:
    """운영 로그용 제목 앞부분. 전체 본문은 노출하지 않는다."""
    return clean_text_ws(title or "")[: max(0, limit)]
