"""Typed payloads for the persisted feed and operator log."""

from .feed import EvidenceLinkPayload, FeedItemPayload, RejectionPayload, SettingsPayload

__all__ = ["EvidenceLinkPayload", "FeedItemPayload", "RejectionPayload", "SettingsPayload"]
