from __future__ import annotations

import hashlib

from news_watch.core.config import FINGERPRINT_CONTENT_CHARS

FINGERPRINT_SEPARATOR = "|"


def generate_fingerprint(
    title: str,
    content: str,
    source: str,
    *,
    content_chars: int = FINGERPRINT_CONTENT_CHARS,
) -> str:
    """제목 + 본문 앞 200자 + 출처명의 SHA-256 (소문자 hex 64자)."""
    data = FINGERPRINT_SEPARATOR.join(
        [title or "", (content or "")[:content_chars], source or ""]
    )
    return hashlib.sha256(data.encode("utf-8")).hexdigest()
