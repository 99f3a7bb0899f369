from __future__ import annotations

import ast
import json
import re
from typing import Any, Callable

from news_watch.processing.types import RawCandidate
from news_watch.utils import clean_text


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    return False


def parse_json_array(text: str) -> list[Any] | None:
    # 문자열에서 JSON 배열을 파싱(직접 파싱 실패 시 대괄호 블록 탐색)
    if not text:
        return None
    raw = text.strip()
    raw = re.sub(r"```(?:json)?", "", raw, flags=re.IGNORECASE).replace("```", "").strip()

    def _try_load(payload: str) -> list[Any] | None:
        try:
            obj = json.loads(payload)
        except Exception:
            return None
        if isinstance(obj, list):
            return obj
        # {"items": [...]} 처럼 감싸서 돌려주는 경우
        if isinstance(obj, dict):
            for key in ("items", "news", "candidates"):
                if isinstance(obj.get(key), list):
                    return obj[key]
        return None

    def _strip_trailing_commas(payload: str) -> str:
        return re.sub(r",\s*([}\]])", r"\1", payload)

    parsed = _try_load(raw)
    if parsed is not None:
        return parsed

    match = re.search(r"\[.*\]", raw, flags=re.DOTALL)
    if not match:
        return None
    cleaned = _strip_trailing_commas(match.group(0))
    parsed = _try_load(cleaned)
    if parsed is not None:
        return parsed
    try:
        obj = ast.literal_eval(cleaned)
        return obj if isinstance(obj, list) else None
    except Exception:
        return None


class CandidateParser:
    def __init__(self, *, clean_text_func: Callable[[str], str] = clean_text) -> None:
        self._clean_text = clean_text_func

    def parse_keywords(self, value: Any) -> tuple[str, ...]:
        if not isinstance(value, list):
            return ()
        out: list[str] = []
        for keyword in value:
            text = self._clean_text(_as_text(keyword))
            if text and text not in out:
                out.append(text)
        return tuple(out)

    def parse_candidate(self, raw: Any) -> RawCandidate:
        # 제공자 응답은 신뢰하지 않는다. 형식이 틀린 값은 빈 값으로 강제 변환하고
        # 시각 검증 단계에서 걸러지도록 둔다.
        if not isinstance(raw, dict):
            return RawCandidate()
        # 지문 안정성을 위해 title/content/source는 원문 그대로 유지한다
        return RawCandidate(
            title=_as_text(raw.get("title")),
            content=_as_text(raw.get("content")),
            source=_as_text(raw.get("source")),
            url=_as_text(raw.get("url")).strip(),
            publish_time=_as_text(raw.get("publishTime")).strip(),
            server_timestamp=_as_text(raw.get("serverTimestamp")).strip(),
            is_telegram=_as_bool(raw.get("isTelegram")),
            matched_keywords=self.parse_keywords(raw.get("matchedKeywords")),
        )

    def parse_candidates(self, payload: list[Any]) -> list[RawCandidate]:
        return [self.parse_candidate(raw) for raw in payload]
