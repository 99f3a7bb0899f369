"""Admission and deduplication pipeline for breaking news candidates."""

__all__ = [
    "dedupe",
    "errors",
    "feed_merger",
    "fingerprint",
    "freshness",
    "llm_client",
    "parsing",
    "pipeline",
    "retrieval",
    "tracker",
    "types",
]
