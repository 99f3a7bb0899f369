from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Protocol

from news_watch.models import EvidenceLinkPayload, FeedItemPayload, RejectionPayload


LogFunc = Callable[[str], None]


@dataclass(frozen=True)
class EvidenceLink:
    uri: str
    title: str

    def to_dict(self) -> EvidenceLinkPayload:
        return {"uri": self.uri, "title": self.title}

    @classmethod
    def from_dict(cls, data: Any) -> "EvidenceLink | None":
        if not isinstance(data, dict):
            return None
        uri = str(data.get("uri") or "").strip()
        if not uri:
            return None
        return cls(uri=uri, title=str(data.get("title") or ""))


@dataclass(frozen=True)
class RawCandidate:
    """검색 제공자가 돌려준 후보 기사. 어떤 필드도 신뢰하지 않는다."""

    title: str = ""
    content: str = ""
    source: str = ""
    url: str = ""
    publish_time: str = ""
    server_timestamp: str = ""
    is_telegram: bool = False
    matched_keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class AdmittedItem:
    id: str
    fingerprint: str
    title: str
    content: str
    source: str
    url: str
    publish_time: str
    server_timestamp: str
    is_telegram: bool = False
    matched_keywords: tuple[str, ...] = ()
    evidence_links: tuple[EvidenceLink, ...] = ()
    screenshot: str = ""

    @classmethod
    def from_candidate(
        cls,
        candidate: RawCandidate,
        *,
        item_id: str,
        fingerprint: str,
        evidence_links: Iterable[EvidenceLink] = (),
        screenshot: str = "",
    ) -> "AdmittedItem":
        return cls(
            id=item_id,
            fingerprint=fingerprint,
            title=candidate.title,
            content=candidate.content,
            source=candidate.source,
            url=candidate.url,
            publish_time=candidate.publish_time,
            server_timestamp=candidate.server_timestamp,
            is_telegram=candidate.is_telegram,
            matched_keywords=tuple(candidate.matched_keywords),
            evidence_links=tuple(evidence_links),
            screenshot=screenshot,
        )

    def with_title(self, title: str) -> "AdmittedItem":
        return dataclasses.replace(self, title=title)

    def to_dict(self) -> FeedItemPayload:
        payload: FeedItemPayload = {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "source": self.source,
            "url": self.url,
            "publishTime": self.publish_time,
            "serverTimestamp": self.server_timestamp,
            "fingerprint": self.fingerprint,
            "matchedKeywords": list(self.matched_keywords),
            "isTelegram": self.is_telegram,
        }
        if self.screenshot:
            payload["screenshot"] = self.screenshot
        if self.evidence_links:
            payload["evidenceLinks"] = [link.to_dict() for link in self.evidence_links]
        return payload

    @classmethod
    def from_dict(cls, data: Any) -> "AdmittedItem | None":
        # 저장된 피드를 읽을 때 id/fingerprint가 없는 항목은 버린다
        if not isinstance(data, dict):
            return None
        item_id = str(data.get("id") or "").strip()
        fingerprint = str(data.get("fingerprint") or "").strip()
        if not item_id or not fingerprint:
            return None
        keywords = data.get("matchedKeywords")
        links_raw = data.get("evidenceLinks") or data.get("groundingSources") or []
        links = [EvidenceLink.from_dict(x) for x in links_raw] if isinstance(links_raw, list) else []
        return cls(
            id=item_id,
            fingerprint=fingerprint,
            title=str(data.get("title") or ""),
            content=str(data.get("content") or ""),
            source=str(data.get("source") or ""),
            url=str(data.get("url") or ""),
            publish_time=str(data.get("publishTime") or ""),
            server_timestamp=str(data.get("serverTimestamp") or ""),
            is_telegram=bool(data.get("isTelegram")),
            matched_keywords=tuple(str(k) for k in keywords) if isinstance(keywords, list) else (),
            evidence_links=tuple(link for link in links if link is not None),
            screenshot=str(data.get("screenshot") or ""),
        )


@dataclass(frozen=True)
class RejectionRecord:
    title_prefix: str
    reason_code: str
    reason_detail: str = ""

    def to_dict(self) -> RejectionPayload:
        return {
            "titlePrefix": self.title_prefix,
            "reasonCode": self.reason_code,
            "reasonDetail": self.reason_detail,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "RejectionRecord | None":
        if not isinstance(data, dict) or not data.get("reasonCode"):
            return None
        return cls(
            title_prefix=str(data.get("titlePrefix") or ""),
            reason_code=str(data.get("reasonCode")),
            reason_detail=str(data.get("reasonDetail") or ""),
        )

    def format(self) -> str:
        if self.title_prefix:
            return f"Rejected [{self.reason_code}] {self.reason_detail} ({self.title_prefix}...)"
        return f"Rejected [{self.reason_code}] {self.reason_detail}"


@dataclass(frozen=True)
class Verdict:
    accepted: bool
    reason_code: str = ""
    reason_detail: str = ""

    @classmethod
    def accept(cls) -> "Verdict":
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason_code: str, reason_detail: str = "") -> "Verdict":
        return cls(accepted=False, reason_code=reason_code, reason_detail=reason_detail)


@dataclass(frozen=True)
class RetrievalResult:
    candidates: list[RawCandidate] = field(default_factory=list)
    evidence_links: list[EvidenceLink] = field(default_factory=list)


@dataclass
class AdmissionResult:
    admitted: list[AdmittedItem] = field(default_factory=list)
    rejections: list[RejectionRecord] = field(default_factory=list)

    @property
    def new_fingerprints(self) -> list[str]:
        return [item.fingerprint for item in self.admitted]


@dataclass
class PipelineRunResult:
    admitted_items: list[AdmittedItem] = field(default_factory=list)
    rejections: list[RejectionRecord] = field(default_factory=list)
    provider_failed: bool = False


class FingerprintStore(Protocol):
    def contains(self, fingerprint: str) -> bool: ...

    def values(self) -> list[str]: ...

    def add_all(self, fingerprints: Iterable[str]) -> None: ...


class BlacklistStore(Protocol):
    def contains(self, fingerprint: str) -> bool: ...

    def values(self) -> list[str]: ...

    def add(self, fingerprint: str) -> None: ...


class FeedStore(Protocol):
    def load(self) -> list[AdmittedItem]: ...

    def save(self, items: list[AdmittedItem]) -> None: ...


class CandidateRetriever(Protocol):
    def fetch_candidates(
        self,
        web_sources: list[str],
        telegram_sources: list[str],
        keywords: list[str],
        now: Any,
    ) -> RetrievalResult: ...
