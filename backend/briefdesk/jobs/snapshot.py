from __future__ import annotations

import asyncio
import datetime
import json
from pathlib import Path
from typing import Awaitable, Callable

from briefdesk.config.settings import Settings
from briefdesk.logging_config import get_logger, log_event
from briefdesk.providers import extras, fmp, newsapi, openweather, tmdb
from briefdesk.schemas.provider import SectionOutcome
from briefdesk.schemas.snapshot import ListSection, Snapshot

logger = get_logger(__name__)

SectionFetcher = Callable[[Settings], Awaitable[SectionOutcome]]

# Order matches the key order of the published document.
SECTION_FETCHERS: tuple[SectionFetcher, ...] = (
    newsapi.fetch_news,
    newsapi.fetch_sports,
    tmdb.fetch_movies,
    openweather.fetch_weather,
    fmp.fetch_markets,
    extras.fetch_quote,
    extras.fetch_fact,
    extras.fetch_history,
)

TRENDS_TITLE = "Top Social Trends"


def format_last_updated(now: datetime.datetime) -> str:
    """Render e.g. ``October 18, 2026 – 07:05 AM``."""
    return f"{now:%B} {now.day}, {now:%Y} – {now:%I:%M %p}"


def format_commit_message(now: datetime.datetime) -> str:
    return f"Automated update: {now:%Y-%m-%d %H:%M}"


async def collect_sections(settings: Settings) -> list[SectionOutcome]:
    return list(await asyncio.gather(*(fetch(settings) for fetch in SECTION_FETCHERS)))


def merge_sections(
    outcomes: list[SectionOutcome], settings: Settings, now: datetime.datetime
) -> Snapshot:
    sections = {outcome.key: outcome.section for outcome in outcomes}
    return Snapshot(
        last_updated=format_last_updated(now),
        trends=ListSection(title=TRENDS_TITLE, items=list(settings.trend_tags)),
        **sections,
    )


async def build_snapshot(
    settings: Settings, now: datetime.datetime | None = None
) -> tuple[Snapshot, list[str]]:
    """Fetch every section concurrently and merge them into one document.

    Returns the snapshot and the keys of sections that fell back.
    """
    now = now or datetime.datetime.now()
    outcomes = await collect_sections(settings)
    snapshot = merge_sections(outcomes, settings, now)
    degraded = [outcome.key for outcome in outcomes if outcome.degraded]
    log_event(
        logger,
        "info",
        "snapshot_built",
        {"sections": len(outcomes), "degraded": degraded},
    )
    return snapshot, degraded


def serialize_snapshot(snapshot: Snapshot) -> str:
    return json.dumps(snapshot.model_dump(by_alias=True), indent=2, ensure_ascii=False)


def write_snapshot(snapshot: Snapshot, path: str | Path) -> str:
    """Overwrite ``path`` with the pretty-printed document and return the text written."""
    content = serialize_snapshot(snapshot)
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    log_event(logger, "info", "snapshot_written", {"path": str(target), "bytes": len(content)})
    return content
