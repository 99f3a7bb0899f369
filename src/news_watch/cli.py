from __future__ import annotations

import argparse
import datetime
import logging
import time

from news_watch.core.config import (
    BLACKLIST_PATH,
    FEED_PATH,
    FINGERPRINTS_PATH,
    REJECTION_LOG_PATH,
    SETTINGS_PATH,
)
from news_watch.processing.feed_merger import FeedMerger
from news_watch.processing.pipeline import build_default_pipeline
from news_watch.processing.tracker import NewsTracker, share_text
from news_watch.processing.types import AdmittedItem, LogFunc
from news_watch.storage import (
    JsonBlacklistSet,
    JsonFeedStore,
    JsonFingerprintSet,
    JsonRejectionLog,
    JsonSettingsStore,
)


def _log(message: str) -> None:
    ts = datetime.datetime.now().strftime("%H:%M:%S")
    print(f"[{ts}] {message}")


def _announce(item: AdmittedItem) -> None:
    _log(f"🔔 خبر عاجل: {item.source} | {item.title}")


def build_tracker(*, logger: LogFunc = _log) -> NewsTracker:
    fingerprints = JsonFingerprintSet(FINGERPRINTS_PATH)
    blacklist = JsonBlacklistSet(BLACKLIST_PATH)
    feed_merger = FeedMerger(store=JsonFeedStore(FEED_PATH))
    pipeline = build_default_pipeline(
        fingerprints=fingerprints,
        blacklist=blacklist,
        feed_merger=feed_merger,
        logger=logger,
    )
    return NewsTracker(
        pipeline=pipeline,
        feed_merger=feed_merger,
        blacklist=blacklist,
        rejection_log=JsonRejectionLog(REJECTION_LOG_PATH),
        settings_store=JsonSettingsStore(SETTINGS_PATH),
        logger=logger,
        on_new_item=_announce,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Breaking news watch for monitored locations.")
    parser.add_argument("--watch", action="store_true", help="repeat on the configured refresh interval")
    parser.add_argument("--delete", metavar="ITEM_ID", help="remove a feed item and blacklist it")
    parser.add_argument("--search", metavar="QUERY", help="search the stored feed")
    parser.add_argument("--share", metavar="ITEM_ID", help="print the share message for a feed item")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def _run_once(tracker: NewsTracker) -> None:
    result = tracker.run_pipeline()
    if result is None:
        return
    for item in result.admitted_items:
        _log(f"+ {item.publish_time} {item.source} | {item.title}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    tracker = build_tracker()

    if args.delete:
        if tracker.delete_item(args.delete):
            _log(f"삭제 완료: {args.delete}")
        else:
            _log(f"항목 없음: {args.delete}")
        return

    if args.share:
        item = tracker.item(args.share)
        if item is None:
            _log(f"항목 없음: {args.share}")
        else:
            print(share_text(item))
        return

    if args.search is not None:
        for item in tracker.search(args.search):
            _log(f"{item.id} {item.publish_time} {item.source} | {item.title}")
        return

    _log("프로그램 시작")
    if not args.watch:
        _run_once(tracker)
        return

    try:
        while True:
            _run_once(tracker)
            interval = tracker.load_settings().refresh_interval_minutes
            _log(f"다음 수집까지 {interval}분 대기")
            time.sleep(interval * 60)
    except KeyboardInterrupt:
        _log("종료")


if __name__ == "__main__":
    main()
