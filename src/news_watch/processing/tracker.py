from __future__ import annotations

import datetime
import threading
from typing import Callable, Protocol

from news_watch.core.settings import TrackerSettings
from news_watch.processing.feed_merger import FeedMerger
from news_watch.processing.pipeline import AdmissionPipeline
from news_watch.processing.types import (
    AdmittedItem,
    BlacklistStore,
    LogFunc,
    PipelineRunResult,
    RejectionRecord,
)


class RejectionLog(Protocol):
    def load(self) -> list[RejectionRecord]: ...

    def prepend(self, records: list[RejectionRecord]) -> list[RejectionRecord]: ...

    def clear(self) -> None: ...


class SettingsStore(Protocol):
    def load(self) -> TrackerSettings: ...

    def save(self, settings: TrackerSettings) -> None: ...


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def share_text(item: AdmittedItem) -> str:
    keywords = ", ".join(item.matched_keywords)
    return (
        f"🚨 *{item.source}* | خبر عاجل\n\n"
        f"{item.title}\n\n"
        f"{item.content}\n\n"
        f"📍 الكلمات المطابقة: {keywords}\n\n"
        f"🔗 المصدر: {item.url}"
    )


class NewsTracker:
    """파이프라인 실행과 사용자 동작(삭제/제목 수정)을 한 번에 하나씩만 허용."""

    def __init__(
        self,
        *,
        pipeline: AdmissionPipeline,
        feed_merger: FeedMerger,
        blacklist: BlacklistStore,
        rejection_log: RejectionLog,
        logger: LogFunc,
        settings_store: SettingsStore | None = None,
        now_provider: Callable[[], datetime.datetime] = utc_now,
        on_new_item: Callable[[AdmittedItem], None] | None = None,
    ) -> None:
        self._pipeline = pipeline
        self._feed_merger = feed_merger
        self._blacklist = blacklist
        self._rejection_log = rejection_log
        self._log = logger
        self._settings_store = settings_store
        self._now_provider = now_provider
        self._on_new_item = on_new_item
        self._in_flight = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._in_flight.locked()

    def load_settings(self) -> TrackerSettings:
        if self._settings_store is None:
            return TrackerSettings()
        return self._settings_store.load()

    def run_pipeline(
        self,
        settings: TrackerSettings | None = None,
        now: datetime.datetime | None = None,
    ) -> PipelineRunResult | None:
        # 실행 중에 들어온 요청은 대기열에 넣지 않고 무시한다
        if not self._in_flight.acquire(blocking=False):
            self._log("이미 수집이 진행 중이라 요청을 건너뜁니다.")
            return None
        try:
            settings = settings or self.load_settings()
            now = now or self._now_provider()
            result = self._pipeline.run(settings, now)
            self._rejection_log.prepend(result.rejections)
            if result.admitted_items and self._on_new_item is not None:
                self._on_new_item(result.admitted_items[0])
            if self._settings_store is not None:
                self._settings_store.save(settings.stamped(now.isoformat()))
            return result
        finally:
            self._in_flight.release()

    def feed(self) -> list[AdmittedItem]:
        return self._feed_merger.load()

    def item(self, item_id: str) -> AdmittedItem | None:
        return self._feed_merger.find(item_id)

    def rejection_log(self) -> list[RejectionRecord]:
        return self._rejection_log.load()

    def clear_log(self) -> None:
        self._rejection_log.clear()

    def delete_item(self, item_id: str) -> bool:
        """피드에서 삭제하고 지문을 차단 목록에 추가."""
        with self._in_flight:
            removed = self._feed_merger.remove(item_id)
            if removed is None:
                return False
            self._blacklist.add(removed.fingerprint)
        self._log(f"삭제 및 차단: {removed.title[:20]}")
        return True

    def edit_title(self, item_id: str, title: str) -> bool:
        # 표시용 제목만 바꾼다. 지문은 수용 당시 값을 유지
        new_title = (title or "").strip()
        if not new_title:
            return False
        with self._in_flight:
            return self._feed_merger.update_title(item_id, new_title) is not None

    def search(self, query: str) -> list[AdmittedItem]:
        q = (query or "").lower()
        return [
            item
            for item in self.feed()
            if q in item.title.lower() or q in item.content.lower() or q in item.source.lower()
        ]
