from __future__ import annotations

from typing import NotRequired, TypedDict


class EvidenceLinkPayload(TypedDict):
    uri: str
    title: str


class FeedItemPayload(TypedDict):
    id: str
    title: str
    content: str
    source: str
    url: str
    publishTime: str
    serverTimestamp: str
    fingerprint: str
    matchedKeywords: list[str]
    isTelegram: bool
    screenshot: NotRequired[str]
    evidenceLinks: NotRequired[list[EvidenceLinkPayload]]


class RejectionPayload(TypedDict):
    titlePrefix: str
    reasonCode: str
    reasonDetail: str


class SettingsPayload(TypedDict):
    webSources: list[str]
    telegramSources: list[str]
    keywords: list[str]
    refreshInterval: int
    lastUpdated: str
