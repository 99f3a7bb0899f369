from __future__ import annotations

from typing import Iterable

from news_watch.core.config import REJECTION_LOG_LIMIT
from news_watch.processing.types import AdmittedItem, RejectionRecord


class MemoryFingerprintSet:
    """프로세스 내 집합. 지문 집합과 차단 목록 양쪽 인터페이스를 모두 제공."""

    def __init__(self, initial: Iterable[str] = ()) -> None:
        self._values: set[str] = set(initial)

    def contains(self, fingerprint: str) -> bool:
        return fingerprint in self._values

    def add_all(self, fingerprints: Iterable[str]) -> None:
        self._values.update(fingerprints)

    def add(self, fingerprint: str) -> None:
        self._values.add(fingerprint)

    def values(self) -> list[str]:
        return sorted(self._values)


class MemoryFeedStore:
    def __init__(self, items: Iterable[AdmittedItem] = ()) -> None:
        self._items: list[AdmittedItem] = list(items)
        self.save_count = 0

    def load(self) -> list[AdmittedItem]:
        return list(self._items)

    def save(self, items: list[AdmittedItem]) -> None:
        self._items = list(items)
        self.save_count += 1


class MemoryRejectionLog:
    def __init__(self, *, limit: int = REJECTION_LOG_LIMIT) -> None:
        self._records: list[RejectionRecord] = []
        self._limit = max(0, limit)

    def load(self) -> list[RejectionRecord]:
        return list(self._records)

    def prepend(self, records: list[RejectionRecord]) -> list[RejectionRecord]:
        self._records = [*records, *self._records][: self._limit]
        return list(self._records)

    def clear(self) -> None:
        self._records = []
