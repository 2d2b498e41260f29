import asyncio

import dsa_sheet.cli as cli
from dsa_sheet.display import Display, progress_bar
from dsa_sheet.errors import NetworkError


def test_progress_bar_bounds() -> None:
    assert progress_bar(0) == "░" * 20
    assert progress_bar(50) == "█" * 10 + "░" * 10
    assert progress_bar(150) == "█" * 20


def test_show_dashboard(fake_api, capsys) -> None:
    tracker = cli.SheetTracker(fake_api, Display())

    asyncio.run(tracker.show_dashboard())

    out = capsys.readouterr().out
    assert "DSA Sheet Dashboard" in out
    assert "Total Problems: 6" in out
    assert "[t-arrays] Arrays  1/4" in out
    assert "Topic t-graphs" in out


def test_show_topic(fake_api, capsys) -> None:
    tracker = cli.SheetTracker(fake_api, Display())

    asyncio.run(tracker.show_topic("t-arrays"))

    out = capsys.readouterr().out
    assert "✅ #1 Problem p1" in out
    assert "⬜ #2 Problem p2" in out
    assert "Tags: array, hashing" in out
    assert "LeetCode: https://leetcode.com/problems/two-sum/" in out
    assert "25% completed" in out


def test_show_missing_topic(fake_api, capsys) -> None:
    tracker = cli.SheetTracker(fake_api, Display())

    asyncio.run(tracker.show_topic("t-missing"))

    assert "Topic not found." in capsys.readouterr().out


def test_toggle_problems_reports_each_outcome(fake_api, capsys) -> None:
    tracker = cli.SheetTracker(fake_api, Display())

    failures = asyncio.run(tracker.toggle_problems("t-arrays", ["p1", "p2", "zzz"]))

    out = capsys.readouterr().out
    assert failures == 1
    assert "Marked problem p1 as not completed." in out
    assert "Marked problem p2 as completed!" in out
    assert "Problem zzz is not in the loaded topic" in out
    assert sorted(fake_api.posts) == [("p1", False), ("p2", True)]


def test_toggle_problems_reports_rollback(fake_api, capsys) -> None:
    fake_api.fail_post = NetworkError("offline")
    tracker = cli.SheetTracker(fake_api, Display())

    failures = asyncio.run(tracker.toggle_problems("t-arrays", ["p2"]))

    out = capsys.readouterr().out
    assert failures == 1
    assert "Could not update problem p2: offline" in out
    assert "⬜ #2 Problem p2" in out


def test_toggle_on_missing_topic(fake_api, capsys) -> None:
    tracker = cli.SheetTracker(fake_api, Display())

    assert asyncio.run(tracker.toggle_problems("nope", ["a", "b"])) == 2
    assert "Topic nope not found." in capsys.readouterr().out


def test_main_without_arguments_prints_help(capsys) -> None:
    assert asyncio.run(cli.main([])) == 0
    assert "USAGE:" in capsys.readouterr().out


def test_main_help(capsys) -> None:
    assert asyncio.run(cli.main(["--help"])) == 0
    assert "dsa-sheet dashboard" in capsys.readouterr().out


def test_main_dispatches_to_tracker(monkeypatch, fake_api, capsys) -> None:
    class FakeContext:
        async def __aenter__(self):
            return fake_api

        async def __aexit__(self, *exc):
            return False

    monkeypatch.setattr(cli, "SheetAPI", FakeContext)

    assert asyncio.run(cli.main(["toggle", "t-arrays", "p3"])) == 0
    assert asyncio.run(cli.main(["topic", "t-arrays"])) == 0
    assert asyncio.run(cli.main(["bogus"])) == 2

    out = capsys.readouterr().out
    assert "Marked problem p3 as completed!" in out
    assert "Unknown command: bogus" in out


def test_main_reports_unexpected_errors(monkeypatch, capsys) -> None:
    class Exploding:
        async def __aenter__(self):
            raise RuntimeError("kaboom")

        async def __aexit__(self, *exc):
            return False

    monkeypatch.setattr(cli, "SheetAPI", Exploding)
    monkeypatch.setattr(cli.config, "DEBUG", False)

    assert asyncio.run(cli.main(["dashboard"])) == 1
    assert "Unexpected error: kaboom" in capsys.readouterr().out
