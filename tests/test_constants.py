from news_watch.core.constants import (
    DEDUPE_REASONS,
    DEFAULT_TELEGRAM_SOURCES,
    FRESHNESS_REASONS,
    REASON_PROVIDER_ERROR,
    TELEGRAM_WEB_URL,
)


def test_reason_groups_are_disjoint() -> None:
    assert not (FRESHNESS_REASONS & DEDUPE_REASONS)
    assert REASON_PROVIDER_ERROR not in FRESHNESS_REASONS | DEDUPE_REASONS


def test_telegram_defaults_are_bare_handles() -> None:
    assert all("/" not in h and not h.startswith("@") for h in DEFAULT_TELEGRAM_SOURCES)
    assert TELEGRAM_WEB_URL.format(handle="dcdgaza") == "https://t.me/s/dcdgaza"
