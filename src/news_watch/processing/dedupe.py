from __future__ import annotations

from typing import Iterable

from news_watch.core.constants import REASON_BLACKLISTED, REASON_DUPLICATE
from news_watch.processing.types import BlacklistStore, FingerprintStore, Verdict


class DedupeFilter:
    """지문 기준 중복/차단 필터.

    저장소는 실행마다 처음 판정할 때 한 번만 읽어 스냅샷으로 쓴다. 이번 실행에서
    새로 통과한 지문은 메모리에만 모아 두고, 실제 저장은 피드 저장이 끝난 뒤
    파이프라인이 수행한다.
    """

    def __init__(
        self,
        *,
        fingerprints: FingerprintStore,
        blacklist: BlacklistStore,
    ) -> None:
        self._fingerprints = fingerprints
        self._blacklist = blacklist
        self._feed_fingerprints: set[str] = set()
        self._seen: set[str] | None = None
        self._blocked: set[str] | None = None
        self.admitted_in_run: list[str] = []
        self._admitted_lookup: set[str] = set()

    def begin_run(self, feed_fingerprints: Iterable[str] = ()) -> None:
        self._feed_fingerprints = set(feed_fingerprints)
        self._seen = None
        self._blocked = None
        self.admitted_in_run = []
        self._admitted_lookup = set()

    def _snapshot(self) -> tuple[set[str], set[str]]:
        if self._seen is None or self._blocked is None:
            self._seen = set(self._fingerprints.values())
            self._blocked = set(self._blacklist.values())
        return self._seen, self._blocked

    def admit(self, fingerprint: str) -> Verdict:
        seen, blocked = self._snapshot()
        # 사용자가 지운 항목은 지문 집합에 있어도 차단 사유가 우선
        if fingerprint in blocked:
            return Verdict.reject(REASON_BLACKLISTED, "removed by user")
        if fingerprint in self._admitted_lookup:
            return Verdict.reject(REASON_DUPLICATE, "same batch")
        if fingerprint in self._feed_fingerprints or fingerprint in seen:
            return Verdict.reject(REASON_DUPLICATE, "already seen")
        self.admitted_in_run.append(fingerprint)
        self._admitted_lookup.add(fingerprint)
        return Verdict.accept()
