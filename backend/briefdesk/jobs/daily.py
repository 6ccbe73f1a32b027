from __future__ import annotations

import asyncio
import datetime
import sys

from briefdesk.config.settings import Settings, settings as default_settings
from briefdesk.jobs.snapshot import build_snapshot, format_commit_message, write_snapshot
from briefdesk.logging_config import configure_logging, get_logger, log_event
from briefdesk.publishing.base import Publisher
from briefdesk.publishing.github import GitHubContentsPublisher
from briefdesk.schemas.run import RunResult

logger = get_logger(__name__)


def build_publisher(settings: Settings) -> Publisher:
    return GitHubContentsPublisher(settings.publisher, timeout=settings.http_timeout_seconds)


async def run_daily_update(
    settings: Settings,
    publisher: Publisher | None = None,
    now: datetime.datetime | None = None,
) -> RunResult:
    now = now or datetime.datetime.now()
    publisher = publisher or build_publisher(settings)

    # 1. Fetch every section and merge them
    snapshot, degraded = await build_snapshot(settings, now=now)

    # 2. Overwrite the local copy
    content = write_snapshot(snapshot, settings.output_path)

    # 3. Push the same bytes to the repository
    publish_result = await asyncio.to_thread(
        publisher.publish, content, format_commit_message(now)
    )

    return RunResult(
        last_updated=snapshot.last_updated,
        output_path=settings.output_path,
        degraded_sections=degraded,
        publish=publish_result,
    )


def run_daily(settings: Settings) -> RunResult:
    return asyncio.run(run_daily_update(settings))


def main() -> int:
    configure_logging(default_settings.log_level)
    try:
        result = run_daily(default_settings)
    except Exception as exc:
        log_event(logger, "error", "run_failed", {"error": str(exc)}, exc_info=True)
        return 1
    log_event(logger, "info", "run_complete", result.model_dump())
    return 0


if __name__ == "__main__":
    sys.exit(main())
