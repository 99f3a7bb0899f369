from __future__ import annotations

import datetime

from news_watch.processing.types import AdmittedItem, FeedStore
from news_watch.utils import parse_datetime_utc

_OLDEST = datetime.datetime.min.replace(tzinfo=datetime.timezone.utc)


def _publish_sort_key(item: AdmittedItem) -> datetime.datetime:
    # 시각을 읽을 수 없는 저장 항목은 맨 뒤로
    return parse_datetime_utc(item.publish_time) or _OLDEST


def merge_feed(existing: list[AdmittedItem], admitted: list[AdmittedItem]) -> list[AdmittedItem]:
    """새 항목을 앞에 붙여 지문별 첫 항목만 남기고 게시 시각 내림차순으로 정렬."""
    seen: set[str] = set()
    unique: list[AdmittedItem] = []
    for item in [*admitted, *existing]:
        if item.fingerprint in seen:
            continue
        seen.add(item.fingerprint)
        unique.append(item)
    # sorted는 안정 정렬이므로 동시각 항목은 입력 순서를 유지
    return sorted(unique, key=_publish_sort_key, reverse=True)


class FeedMerger:
    def __init__(self, *, store: FeedStore) -> None:
        self._store = store

    def load(self) -> list[AdmittedItem]:
        return self._store.load()

    def merge(self, existing: list[AdmittedItem], admitted: list[AdmittedItem]) -> list[AdmittedItem]:
        return merge_feed(existing, admitted)

    def save(self, items: list[AdmittedItem]) -> None:
        self._store.save(items)

    def find(self, item_id: str) -> AdmittedItem | None:
        return next((item for item in self.load() if item.id == item_id), None)

    def remove(self, item_id: str) -> AdmittedItem | None:
        feed = self.load()
        removed = next((item for item in feed if item.id == item_id), None)
        if removed is None:
            return None
        self._store.save([item for item in feed if item.id != item_id])
        return removed

    def update_title(self, item_id: str, title: str) -> AdmittedItem | None:
        feed = self.load()
        updated: AdmittedItem | None = None
        out: list[AdmittedItem] = []
        for item in feed:
            if item.id == item_id:
                updated = item.with_title(title)
                out.append(updated)
            else:
                out.append(item)
        if updated is not None:
            self._store.save(out)
        return updated
