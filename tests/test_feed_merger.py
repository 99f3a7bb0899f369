from __future__ import annotations

import datetime

from news_watch.processing.feed_merger import FeedMerger, merge_feed
from news_watch.processing.types import AdmittedItem
from news_watch.storage import MemoryFeedStore

BASE = datetime.datetime(2024, 5, 1, 12, 0, tzinfo=datetime.timezone.utc)


def _item(item_id: str, fp: str, minute: int, title: str = "") -> AdmittedItem:
    published = (BASE + datetime.timedelta(minutes=minute)).isoformat()
    return AdmittedItem(
        id=item_id,
        fingerprint=fp,
        title=title or item_id,
        content="",
        source="src",
        url="",
        publish_time=published,
        server_timestamp=published,
    )


def test_merge_sorts_by_publish_time_descending() -> None:
    existing = [_item("a", "fa", 10), _item("b", "fb", 1)]
    admitted = [_item("c", "fc", 5), _item("d", "fd", 20)]
    merged = merge_feed(existing, admitted)
    assert [i.id for i in merged] == ["d", "a", "c", "b"]


def test_merge_keeps_new_item_on_fingerprint_collision() -> None:
    existing = [_item("old", "same", 1)]
    admitted = [_item("new", "same", 1)]
    merged = merge_feed(existing, admitted)
    assert [i.id for i in merged] == ["new"]


def test_merge_size_bounds_and_uniqueness() -> None:
    existing = [_item("a", "fa", 1), _item("b", "fb", 2), _item("c", "fc", 3)]
    admitted = [_item("x", "fb", 4), _item("y", "fy", 0), _item("z", "fy", 9)]
    merged = merge_feed(existing, admitted)
    assert len(existing) <= len(merged) <= len(existing) + len(admitted)
    fps = [i.fingerprint for i in merged]
    assert len(fps) == len(set(fps))
    times = [i.publish_time for i in merged]
    assert times == sorted(times, reverse=True)


def test_merge_ties_keep_input_order_with_new_items_first() -> None:
    existing = [_item("e1", "f1", 5)]
    admitted = [_item("n1", "f2", 5), _item("n2", "f3", 5)]
    assert [i.id for i in merge_feed(existing, admitted)] == ["n1", "n2", "e1"]


def test_merge_is_idempotent() -> None:
    existing = [_item("a", "fa", 1)]
    admitted = [_item("b", "fb", 2)]
    once = merge_feed(existing, admitted)
    assert merge_feed(once, admitted) == once


def test_unparseable_stored_time_sorts_last() -> None:
    broken = AdmittedItem(
        id="broken", fingerprint="fx", title="", content="", source="", url="",
        publish_time="n/a", server_timestamp="n/a",
    )
    merged = merge_feed([broken, _item("a", "fa", 1)], [])
    assert [i.id for i in merged] == ["a", "broken"]


def test_remove_and_update_title() -> None:
    store = MemoryFeedStore([_item("a", "fa", 2), _item("b", "fb", 1)])
    merger = FeedMerger(store=store)
    assert merger.update_title("a", "edited").title == "edited"
    assert merger.find("a").fingerprint == "fa"
    removed = merger.remove("b")
    assert removed is not None and removed.fingerprint == "fb"
    assert [i.id for i in store.load()] == ["a"]
    assert merger.remove("missing") is None
    assert merger.update_title("missing", "x") is None


def test_stored_time_outside_datetime_range_sorts_last() -> None:
    edge = AdmittedItem(
        id="edge", fingerprint="fe", title="", content="", source="", url="",
        publish_time="0001-01-01T00:00:00+05:00", server_timestamp="",
    )
    merged = merge_feed([edge], [_item("a", "fa", 1)])
    assert [i.id for i in merged] == ["a", "edge"]
