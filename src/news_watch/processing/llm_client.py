from __future__ import annotations

import logging
import os
import time
from typing import Any

import requests

from news_watch.processing.errors import ProviderError

try:
    from dotenv import load_dotenv
except Exception:  # pragma: no cover - optional dependency
    load_dotenv = None

if load_dotenv:
    from pathlib import Path

    _repo_root = Path(__file__).resolve().parents[3]
    load_dotenv(dotenv_path=_repo_root / ".env")

logger = logging.getLogger(__name__)

GEMINI_API_BASE = os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_TIMEOUT_SEC = int(os.getenv("GEMINI_TIMEOUT_SEC", "90"))
# 파이프라인 안에서는 재시도하지 않는다 (주기 실행이 재시도 역할)
GEMINI_MAX_RETRIES = int(os.getenv("GEMINI_MAX_RETRIES", "0"))
GEMINI_RETRY_BACKOFF_SEC = float(os.getenv("GEMINI_RETRY_BACKOFF_SEC", "1.5"))
GEMINI_MAX_OUTPUT_TOKENS = int(os.getenv("GEMINI_MAX_OUTPUT_TOKENS", "8192"))

_RETRYABLE_STATUS = {500, 502, 503, 504}


def extract_gemini_text(payload: dict[str, Any]) -> str:
    # Gemini REST 응답에서 텍스트 파트를 모두 이어 붙인다
    try:
        parts = payload["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return ""
    if not isinstance(parts, list):
        return ""
    texts = [str(p.get("text") or "") for p in parts if isinstance(p, dict)]
    return "".join(texts).strip()


def extract_grounding_chunks(payload: dict[str, Any]) -> list[dict[str, str]]:
    # groundingMetadata.groundingChunks[].web 에서 {uri, title}만 추출
    try:
        metadata = payload["candidates"][0].get("groundingMetadata") or {}
    except (KeyError, IndexError, TypeError, AttributeError):
        return []
    if not isinstance(metadata, dict):
        return []
    chunks = metadata.get("groundingChunks") or []
    if not isinstance(chunks, list):
        return []
    out: list[dict[str, str]] = []
    for chunk in chunks:
        web = chunk.get("web") if isinstance(chunk, dict) else None
        if not isinstance(web, dict) or not web.get("uri"):
            continue
        out.append({"uri": str(web["uri"]), "title": str(web.get("title") or "")})
    return out


def gemini_generate_grounded(
    prompt: str,
    *,
    response_schema: dict[str, Any] | None = None,
    timeout_sec: int = GEMINI_TIMEOUT_SEC,
    max_retries: int = GEMINI_MAX_RETRIES,
    session: requests.Session | None = None,
) -> dict[str, Any]:
    """Google 검색 그라운딩을 켠 generateContent 호출. 실패 시 ProviderError."""
    api_key = os.getenv("GEMINI_API_KEY", "").strip()
    if not api_key:
        raise ProviderError("config", "GEMINI_API_KEY 미설정")
    url = f"{GEMINI_API_BASE}/models/{GEMINI_MODEL}:generateContent"
    generation_config: dict[str, Any] = {
        "temperature": 0.1,
        "maxOutputTokens": GEMINI_MAX_OUTPUT_TOKENS,
        "responseMimeType": "application/json",
    }
    if response_schema:
        generation_config["responseSchema"] = response_schema
    request_payload = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "tools": [{"googleSearch": {}}],
        "generationConfig": generation_config,
    }
    http = session or requests
    max_attempts = max(1, max_retries + 1)
    last_error: ProviderError | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            resp = http.post(
                url,
                headers={"x-goog-api-key": api_key, "Content-Type": "application/json"},
                json=request_payload,
                timeout=timeout_sec,
            )
        except requests.Timeout as e:
            last_error = ProviderError("timeout", f"{type(e).__name__}: {e}")
        except requests.RequestException as e:
            last_error = ProviderError("network", f"{type(e).__name__}: {e}")
        else:
            if resp.ok:
                try:
                    data = resp.json()
                except ValueError:
                    raise ProviderError("parse", "Gemini 응답 JSON 파싱 실패")
                if not isinstance(data, dict):
                    raise ProviderError("parse", "Gemini 응답 형식 아님")
                return data
            kind = "quota" if resp.status_code == 429 else "http"
            last_error = ProviderError(kind, f"{resp.status_code} {resp.text[:200]}")
            if resp.status_code not in _RETRYABLE_STATUS:
                break

        if attempt < max_attempts:
            logger.warning("Gemini 호출 재시도 %s/%s: %s", attempt, max_attempts - 1, last_error)
            time.sleep(GEMINI_RETRY_BACKOFF_SEC * (2 ** (attempt - 1)))

    assert last_error is not None
    logger.error("Gemini 호출 실패: %s", last_error)
    raise last_error
