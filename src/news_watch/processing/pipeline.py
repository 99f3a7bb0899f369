from __future__ import annotations

import datetime
import uuid
from typing import Callable, Iterable

from news_watch.core.config import SCREENSHOT_URL_TEMPLATE, TITLE_PREFIX_CHARS
from news_watch.core.constants import DEDUPE_REASONS, FRESHNESS_REASONS, REASON_PROVIDER_ERROR
from news_watch.core.settings import TrackerSettings
from news_watch.processing.dedupe import DedupeFilter
from news_watch.processing.errors import ProviderError
from news_watch.processing.feed_merger import FeedMerger
from news_watch.processing.fingerprint import generate_fingerprint
from news_watch.processing.freshness import FreshnessValidator
from news_watch.processing.retrieval import GeminiCandidateRetriever
from news_watch.processing.types import (
    AdmissionResult,
    AdmittedItem,
    BlacklistStore,
    CandidateRetriever,
    EvidenceLink,
    FingerprintStore,
    LogFunc,
    PipelineRunResult,
    RawCandidate,
    RejectionRecord,
    Verdict,
)
from news_watch.utils import title_prefix

FingerprintFunc = Callable[[str, str, str], str]


def default_visual_ref(fingerprint: str) -> str:
    return SCREENSHOT_URL_TEMPLATE.format(fingerprint=fingerprint)


def default_id_factory() -> str:
    return str(uuid.uuid4())


class AdmissionPipeline:
    def __init__(
        self,
        *,
        retriever: CandidateRetriever,
        freshness: FreshnessValidator,
        dedupe_filter: DedupeFilter,
        feed_merger: FeedMerger,
        fingerprints: FingerprintStore,
        logger: LogFunc,
        fingerprint_func: FingerprintFunc = generate_fingerprint,
        id_factory: Callable[[], str] = default_id_factory,
        visual_ref_func: Callable[[str], str] | None = default_visual_ref,
        title_prefix_chars: int = TITLE_PREFIX_CHARS,
    ) -> None:
        self._retriever = retriever
        self._freshness = freshness
        self._dedupe = dedupe_filter
        self._feed_merger = feed_merger
        self._fingerprints = fingerprints
        self._log = logger
        self._fingerprint = fingerprint_func
        self._new_id = id_factory
        self._visual_ref = visual_ref_func
        self._title_prefix_chars = title_prefix_chars

    def _reject(self, candidate: RawCandidate, verdict: Verdict) -> RejectionRecord:
        record = RejectionRecord(
            title_prefix=title_prefix(candidate.title, self._title_prefix_chars),
            reason_code=verdict.reason_code,
            reason_detail=verdict.reason_detail,
        )
        self._log(record.format())
        return record

    def admit_batch(
        self,
        candidates: list[RawCandidate],
        now: datetime.datetime,
        *,
        evidence_links: Iterable[EvidenceLink] = (),
        feed_fingerprints: Iterable[str] = (),
    ) -> AdmissionResult:
        """후보를 받은 순서대로 지문 -> 시각 검증 -> 중복/차단 필터에 통과시킨다.

        저장소에는 쓰지 않는다. 통과 항목은 result.new_fingerprints로 확인.
        """
        links = tuple(evidence_links)
        result = AdmissionResult()
        self._dedupe.begin_run(feed_fingerprints)
        for candidate in candidates:
            fp = self._fingerprint(candidate.title, candidate.content, candidate.source)

            verdict = self._freshness.validate(candidate, now)
            if not verdict.accepted:
                result.rejections.append(self._reject(candidate, verdict))
                continue

            verdict = self._dedupe.admit(fp)
            if not verdict.accepted:
                result.rejections.append(self._reject(candidate, verdict))
                continue

            result.admitted.append(
                AdmittedItem.from_candidate(
                    candidate,
                    item_id=self._new_id(),
                    fingerprint=fp,
                    evidence_links=links,
                    screenshot=self._visual_ref(fp) if self._visual_ref else "",
                )
            )
        return result

    def run(self, settings: TrackerSettings, now: datetime.datetime) -> PipelineRunResult:
        self._log(
            f"수집 시작: 웹 {len(settings.web_sources)}개, "
            f"텔레그램 {len(settings.telegram_sources)}개, 키워드 {len(settings.keywords)}개"
        )
        try:
            retrieved = self._retriever.fetch_candidates(
                settings.web_sources,
                settings.telegram_sources,
                settings.keywords,
                now,
            )
        except ProviderError as e:
            # 배치 전체 실패: 지문 집합과 피드는 건드리지 않는다
            record = RejectionRecord(
                title_prefix="",
                reason_code=REASON_PROVIDER_ERROR,
                reason_detail=f"Error fetching news: {e.to_note()}",
            )
            self._log(record.format())
            return PipelineRunResult(rejections=[record], provider_failed=True)

        self._log(
            f"후보 {len(retrieved.candidates)}개, 근거 링크 {len(retrieved.evidence_links)}개"
        )
        existing = self._feed_merger.load()
        admitted = self.admit_batch(
            retrieved.candidates,
            now,
            evidence_links=retrieved.evidence_links,
            feed_fingerprints=[item.fingerprint for item in existing],
        )
        if admitted.admitted:
            merged = self._feed_merger.merge(existing, admitted.admitted)
            # 피드 저장 후 지문 기록: 중간 실패 시 '기록됐지만 전달 안 됨' 상태를 피한다
            self._feed_merger.save(merged)
            self._fingerprints.add_all(admitted.new_fingerprints)
        codes = [r.reason_code for r in admitted.rejections]
        self._log(
            f"수집 완료: 후보 {len(retrieved.candidates)}개, 수용 {len(admitted.admitted)}개, "
            f"거절 {len(codes)}개 (시각 {sum(c in FRESHNESS_REASONS for c in codes)}, "
            f"중복/차단 {sum(c in DEDUPE_REASONS for c in codes)})"
        )
        return PipelineRunResult(
            admitted_items=admitted.admitted,
            rejections=admitted.rejections,
        )


def build_default_pipeline(
    *,
    fingerprints: FingerprintStore,
    blacklist: BlacklistStore,
    feed_merger: FeedMerger,
    logger: LogFunc,
    retriever: CandidateRetriever | None = None,
) -> AdmissionPipeline:
    return AdmissionPipeline(
        retriever=retriever or GeminiCandidateRetriever(),
        freshness=FreshnessValidator(),
        dedupe_filter=DedupeFilter(fingerprints=fingerprints, blacklist=blacklist),
        feed_merger=feed_merger,
        fingerprints=fingerprints,
        logger=logger,
    )
