from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Iterable

from news_watch.core.config import REJECTION_LOG_LIMIT
from news_watch.core.settings import TrackerSettings
from news_watch.processing.types import AdmittedItem, RejectionRecord

logger = logging.getLogger(__name__)


def _safe_read_json(path: str, default: Any) -> Any:
    """JSON 파일을 안전하게 로드, 실패 시 기본값 반환."""
    if not os.path.exists(path):
        return default
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except Exception as e:
        logger.warning("JSON 로드 실패 (%s): %s", path, e)
        return default


def _atomic_write_json(path: str, payload: Any) -> None:
    """임시 파일로 저장 후 원자적 교체."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    tmp_path = f"{path}.tmp"
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    os.replace(tmp_path, path)


class _JsonStringSet:
    """문자열 집합을 삽입 순서 리스트로 저장."""

    def __init__(self, path: str) -> None:
        self._path = path

    def _read(self) -> list[str]:
        data = _safe_read_json(self._path, [])
        if not isinstance(data, list):
            return []
        return [x for x in data if isinstance(x, str) and x]

    def contains(self, fingerprint: str) -> bool:
        return fingerprint in set(self._read())

    def values(self) -> list[str]:
        return self._read()

    def _extend(self, fingerprints: Iterable[str]) -> None:
        current = self._read()
        seen = set(current)
        added = False
        for fp in fingerprints:
            if fp and fp not in seen:
                current.append(fp)
                seen.add(fp)
                added = True
        if added:
            _atomic_write_json(self._path, current)


class JsonFingerprintSet(_JsonStringSet):
    def add_all(self, fingerprints: Iterable[str]) -> None:
        self._extend(fingerprints)


class JsonBlacklistSet(_JsonStringSet):
    def add(self, fingerprint: str) -> None:
        self._extend([fingerprint])


class JsonFeedStore:
    def __init__(self, path: str) -> None:
        self._path = path

    def load(self) -> list[AdmittedItem]:
        data = _safe_read_json(self._path, [])
        if not isinstance(data, list):
            return []
        items = [AdmittedItem.from_dict(x) for x in data]
        return [item for item in items if item is not None]

    def save(self, items: list[AdmittedItem]) -> None:
        _atomic_write_json(self._path, [item.to_dict() for item in items])


class JsonRejectionLog:
    """운영 로그: 최신 순, 최대 limit개만 유지."""

    def __init__(self, path: str, *, limit: int = REJECTION_LOG_LIMIT) -> None:
        self._path = path
        self._limit = max(0, limit)

    def load(self) -> list[RejectionRecord]:
        data = _safe_read_json(self._path, [])
        if not isinstance(data, list):
            return []
        records = [RejectionRecord.from_dict(x) for x in data]
        return [r for r in records if r is not None]

    def prepend(self, records: list[RejectionRecord]) -> list[RejectionRecord]:
        merged = [*records, *self.load()][: self._limit]
        _atomic_write_json(self._path, [r.to_dict() for r in merged])
        return merged

    def clear(self) -> None:
        _atomic_write_json(self._path, [])


class JsonSettingsStore:
    def __init__(self, path: str) -> None:
        self._path = path

    def load(self) -> TrackerSettings:
        return TrackerSettings.from_dict(_safe_read_json(self._path, None))

    def save(self, settings: TrackerSettings) -> None:
        _atomic_write_json(self._path, settings.to_dict())
