import asyncio
import datetime
import json
from unittest.mock import patch
from urllib.error import URLError

from briefdesk.jobs.snapshot import (
    build_snapshot,
    format_commit_message,
    format_last_updated,
    write_snapshot,
)

SNAPSHOT_KEYS = [
    "lastUpdated",
    "news",
    "sports",
    "entertainment",
    "weather",
    "markets",
    "quote",
    "fact",
    "history",
    "trends",
]
FIXED_NOW = datetime.datetime(2026, 10, 18, 19, 5)


async def fake_upstream(url: str, timeout: float = 10.0):
    if "top-headlines" in url:
        return {"articles": [{"title": "Sports story" if "sports" in url else "Big story"}]}
    if "/data/2.5/weather" in url:
        return {"main": {"temp": 30}, "weather": [{"description": "clear sky"}]}
    if "/trending/movie/day" in url:
        return {"results": [{"title": "A Film", "overview": "Plot."}]}
    if "/quotes/index" in url:
        return [{"symbol": "^NSEI", "name": "NIFTY 50", "price": 24500.5}]
    if "uselessfacts" in url:
        return {"text": "A fact."}
    if "quotable" in url:
        return {"content": "A quote.", "author": "Someone"}
    if "muffinlabs" in url:
        return {"data": {"Events": [{"text": "An event."}]}}
    raise AssertionError(f"unexpected url {url}")


def _build_with_stubbed_upstreams(settings):
    with patch("briefdesk.providers.newsapi.get_json", new=fake_upstream), patch(
        "briefdesk.providers.openweather.get_json", new=fake_upstream
    ), patch("briefdesk.providers.tmdb.get_json", new=fake_upstream), patch(
        "briefdesk.providers.fmp.get_json", new=fake_upstream
    ), patch("briefdesk.providers.extras.get_json", new=fake_upstream):
        return asyncio.run(build_snapshot(settings, now=FIXED_NOW))


def test_every_section_present_when_upstreams_fail(fake_settings) -> None:
    with patch("briefdesk.providers.base.urlopen", side_effect=URLError("offline")):
        snapshot, degraded = asyncio.run(build_snapshot(fake_settings, now=FIXED_NOW))

    document = snapshot.model_dump(by_alias=True)
    assert list(document) == SNAPSHOT_KEYS
    assert sorted(degraded) == sorted(SNAPSHOT_KEYS[1:-1])
    assert document["news"] == {
        "title": "Top News",
        "items": ["Top news is unavailable right now."],
    }
    assert document["quote"]["title"] == "Quote of the Day"
    assert document["quote"]["content"]
    assert document["trends"]["items"] == fake_settings.trend_tags


def test_connection_reset_degrades_every_section(fake_settings) -> None:
    with patch(
        "briefdesk.providers.base.urlopen", side_effect=ConnectionResetError(104, "reset")
    ):
        snapshot, degraded = asyncio.run(build_snapshot(fake_settings, now=FIXED_NOW))

    assert len(degraded) == 8
    assert list(snapshot.model_dump(by_alias=True)) == SNAPSHOT_KEYS


def test_key_set_is_stable_across_runs(fake_settings) -> None:
    healthy, healthy_degraded = _build_with_stubbed_upstreams(fake_settings)
    with patch("briefdesk.providers.base.urlopen", side_effect=URLError("offline")):
        failing, _ = asyncio.run(build_snapshot(fake_settings, now=FIXED_NOW))

    assert healthy_degraded == []
    assert list(healthy.model_dump(by_alias=True)) == list(failing.model_dump(by_alias=True))
    assert healthy.news.items == ["Big story"]
    assert healthy.sports.items == ["Sports story"]
    assert healthy.markets.items == ["NIFTY 50: 24500.5"]
    assert healthy.entertainment.items == ["A Film — Plot...."]
    assert healthy.history.content == "An event."


def test_timestamp_formats() -> None:
    assert format_last_updated(FIXED_NOW) == "October 18, 2026 – 07:05 PM"
    assert format_last_updated(datetime.datetime(2026, 3, 4, 9, 30)) == "March 4, 2026 – 09:30 AM"
    assert format_commit_message(FIXED_NOW) == "Automated update: 2026-10-18 19:05"


def test_write_snapshot_overwrites_file(fake_settings, tmp_path) -> None:
    snapshot, _ = _build_with_stubbed_upstreams(fake_settings)
    target = tmp_path / "out" / "data.json"
    target.parent.mkdir()
    target.write_text('{"stale": true}', encoding="utf-8")

    content = write_snapshot(snapshot, target)

    written = target.read_text(encoding="utf-8")
    assert written == content
    assert "30°C" in written
    assert written.startswith('{\n  "lastUpdated": "October 18, 2026 – 07:05 PM"')
    assert list(json.loads(written)) == SNAPSHOT_KEYS
