"""Persistence for fingerprints, blacklist, feed, operator log and settings."""

from .json_store import (
    JsonBlacklistSet,
    JsonFeedStore,
    JsonFingerprintSet,
    JsonRejectionLog,
    JsonSettingsStore,
)
from .memory_store import MemoryFeedStore, MemoryFingerprintSet, MemoryRejectionLog

__all__ = [
    "JsonBlacklistSet",
    "JsonFeedStore",
    "JsonFingerprintSet",
    "JsonRejectionLog",
    "JsonSettingsStore",
    "MemoryFeedStore",
    "MemoryFingerprintSet",
    "MemoryRejectionLog",
]
