from __future__ import annotations

from news_watch import cli
from news_watch.processing.types import AdmittedItem, PipelineRunResult


class _FakeTracker:
    def __init__(self) -> None:
        self.runs = 0
        self.deleted: list[str] = []
        self.stored: dict[str, AdmittedItem] = {}

    def run_pipeline(self):
        self.runs += 1
        return PipelineRunResult(admitted_items=[], rejections=[], provider_failed=False)

    def delete_item(self, item_id: str) -> bool:
        self.deleted.append(item_id)
        return item_id == "known"

    def search(self, query: str):
        return []

    def item(self, item_id: str):
        return self.stored.get(item_id)


def test_parse_args_defaults() -> None:
    args = cli.parse_args([])
    assert args.watch is False
    assert args.delete is None
    assert args.search is None


def test_main_runs_once_without_watch(monkeypatch, capsys) -> None:
    tracker = _FakeTracker()
    monkeypatch.setattr(cli, "build_tracker", lambda **_: tracker)
    cli.main([])
    assert tracker.runs == 1
    assert "프로그램 시작" in capsys.readouterr().out


def test_main_delete_does_not_run_pipeline(monkeypatch, capsys) -> None:
    tracker = _FakeTracker()
    monkeypatch.setattr(cli, "build_tracker", lambda **_: tracker)
    cli.main(["--delete", "missing"])
    assert tracker.deleted == ["missing"]
    assert tracker.runs == 0
    assert "항목 없음" in capsys.readouterr().out


def test_build_tracker_uses_configured_paths(monkeypatch, tmp_path) -> None:
    for name in ("FEED_PATH", "FINGERPRINTS_PATH", "BLACKLIST_PATH", "REJECTION_LOG_PATH", "SETTINGS_PATH"):
        monkeypatch.setattr(cli, name, str(tmp_path / f"{name.lower()}.json"))
    tracker = cli.build_tracker(logger=lambda _m: None)
    assert tracker.feed() == []
    assert tracker.rejection_log() == []
    assert tracker.load_settings().refresh_interval_minutes == 1


def test_main_share_prints_message_for_known_item(monkeypatch, capsys) -> None:
    tracker = _FakeTracker()
    tracker.stored["x1"] = AdmittedItem(
        id="x1", fingerprint="fp", title="عنوان", content="نص", source="dcdgaza",
        url="https://t.me/dcdgaza/9", publish_time="", server_timestamp="",
    )
    monkeypatch.setattr(cli, "build_tracker", lambda **_: tracker)
    cli.main(["--share", "x1"])
    out = capsys.readouterr().out
    assert "*dcdgaza*" in out
    assert "https://t.me/dcdgaza/9" in out
    assert tracker.runs == 0


def test_main_share_unknown_item(monkeypatch, capsys) -> None:
    tracker = _FakeTracker()
    monkeypatch.setattr(cli, "build_tracker", lambda **_: tracker)
    cli.main(["--share", "nope"])
    assert "항목 없음: nope" in capsys.readouterr().out
