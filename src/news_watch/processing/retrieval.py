from __future__ import annotations

import datetime
from typing import Any, Callable

from news_watch.core.config import MAX_AGE_MINUTES
from news_watch.core.constants import TELEGRAM_WEB_URL
from news_watch.processing.errors import ProviderError
from news_watch.processing.llm_client import (
    extract_gemini_text,
    extract_grounding_chunks,
    gemini_generate_grounded,
)
from news_watch.processing.parsing import CandidateParser, parse_json_array
from news_watch.processing.prompts.candidate_prompt import CANDIDATE_PROMPT, RESPONSE_SCHEMA
from news_watch.processing.types import EvidenceLink, RetrievalResult

GenerateFunc = Callable[..., dict[str, Any]]


def telegram_web_urls(handles: list[str]) -> list[str]:
    out: list[str] = []
    for handle in handles:
        h = (handle or "").strip().lstrip("@")
        if h:
            out.append(TELEGRAM_WEB_URL.format(handle=h))
    return out


def build_candidate_prompt(
    web_sources: list[str],
    telegram_sources: list[str],
    keywords: list[str],
    now: datetime.datetime,
    *,
    max_age_minutes: float = MAX_AGE_MINUTES,
) -> str:
    return CANDIDATE_PROMPT.render(
        web_sources=web_sources,
        telegram_urls=telegram_web_urls(telegram_sources),
        keywords=keywords,
        max_age_minutes=int(max_age_minutes),
        today=now.strftime("%m/%d/%Y"),
        now_iso=now.isoformat(),
    )


class GeminiCandidateRetriever:
    def __init__(
        self,
        *,
        parser: CandidateParser | None = None,
        generate_func: GenerateFunc = gemini_generate_grounded,
        max_age_minutes: float = MAX_AGE_MINUTES,
    ) -> None:
        self._parser = parser or CandidateParser()
        self._generate = generate_func
        self._max_age_minutes = max_age_minutes

    def fetch_candidates(
        self,
        web_sources: list[str],
        telegram_sources: list[str],
        keywords: list[str],
        now: datetime.datetime,
    ) -> RetrievalResult:
        prompt = build_candidate_prompt(
            web_sources,
            telegram_sources,
            keywords,
            now,
            max_age_minutes=self._max_age_minutes,
        )
        payload = self._generate(prompt, response_schema=RESPONSE_SCHEMA)
        try:
            return self._to_result(payload)
        except (TypeError, AttributeError, ValueError, KeyError) as e:
            # 예상 밖 응답 구조는 배치 전체 실패로 처리
            raise ProviderError("parse", f"응답 구조 오류: {type(e).__name__}: {e}") from e

    def _to_result(self, payload: dict[str, Any]) -> RetrievalResult:
        if not isinstance(payload, dict):
            raise ProviderError("parse", f"응답이 객체가 아님: {type(payload).__name__}")
        text = extract_gemini_text(payload)
        if not text:
            # 그라운딩 결과가 없을 때 빈 배열 대신 빈 텍스트가 오는 경우가 있다
            items: list[Any] = []
        else:
            parsed = parse_json_array(text)
            if parsed is None:
                snippet = " ".join(text.split())[:160]
                raise ProviderError("parse", f"후보 JSON 배열 아님: {snippet}")
            items = parsed
        links = [EvidenceLink.from_dict(chunk) for chunk in extract_grounding_chunks(payload)]
        return RetrievalResult(
            candidates=self._parser.parse_candidates(items),
            evidence_links=[link for link in links if link is not None],
        )
