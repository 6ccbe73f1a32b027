from __future__ import annotations

from briefdesk.config.settings import Settings
from briefdesk.providers.base import SHAPE_ERRORS, UpstreamError, build_url, content_fallback, get_json
from briefdesk.schemas.provider import SectionOutcome
from briefdesk.schemas.snapshot import ContentSection


_QUOTE_TITLE = "Quote of the Day"
_FACT_TITLE = "Quick Fact"
_HISTORY_TITLE = "Today in History"


async def fetch_quote(settings: Settings) -> SectionOutcome:
    unavailable = "No quote today. Check back soon."
    url = build_url(settings.providers.quote_base_url, "/random")
    try:
        payload = await get_json(url, timeout=settings.http_timeout_seconds)
        content = f"{payload['content']} — {payload['author']}"
    except UpstreamError as exc:
        return content_fallback("quote", _QUOTE_TITLE, exc.status, unavailable, exc.detail)
    except SHAPE_ERRORS as exc:
        return content_fallback("quote", _QUOTE_TITLE, "error", unavailable, repr(exc))

    return SectionOutcome(key="quote", section=ContentSection(title=_QUOTE_TITLE, content=content))


async def fetch_fact(settings: Settings) -> SectionOutcome:
    unavailable = "No fact today. Check back soon."
    url = build_url(settings.providers.fact_base_url, "/random.json", {"language": "en"})
    try:
        payload = await get_json(url, timeout=settings.http_timeout_seconds)
        content = str(payload["text"])
    except UpstreamError as exc:
        return content_fallback("fact", _FACT_TITLE, exc.status, unavailable, exc.detail)
    except SHAPE_ERRORS as exc:
        return content_fallback("fact", _FACT_TITLE, "error", unavailable, repr(exc))

    return SectionOutcome(key="fact", section=ContentSection(title=_FACT_TITLE, content=content))


async def fetch_history(settings: Settings) -> SectionOutcome:
    unavailable = "No history entry today. Check back soon."
    url = build_url(settings.providers.history_base_url, "/date")
    try:
        payload = await get_json(url, timeout=settings.http_timeout_seconds)
        content = str(payload["data"]["Events"][0]["text"])
    except UpstreamError as exc:
        return content_fallback("history", _HISTORY_TITLE, exc.status, unavailable, exc.detail)
    except SHAPE_ERRORS as exc:
        return content_fallback("history", _HISTORY_TITLE, "error", unavailable, repr(exc))

    return SectionOutcome(
        key="history", section=ContentSection(title=_HISTORY_TITLE, content=content)
    )
