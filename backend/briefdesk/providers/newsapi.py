from __future__ import annotations

from briefdesk.config.settings import Settings
from briefdesk.providers.base import SHAPE_ERRORS, UpstreamError, build_url, get_json, list_fallback
from briefdesk.schemas.provider import SectionOutcome
from briefdesk.schemas.snapshot import ListSection


_HEADLINES_PATH = "/v2/top-headlines"


async def _fetch_headlines(
    settings: Settings, key: str, title: str, unavailable: str, category: str | None = None
) -> SectionOutcome:
    api_key = settings.providers.news_api_key
    if not api_key:
        return list_fallback(key, title, "missing_key", unavailable)

    params = {
        "country": settings.news_country,
        "pageSize": str(settings.news_page_size),
        "apiKey": api_key,
    }
    if category:
        params["category"] = category
    url = build_url(settings.providers.news_base_url, _HEADLINES_PATH, params)
    try:
        payload = await get_json(url, timeout=settings.http_timeout_seconds)
        # removed or untitled articles come back with a null title
        items = [
            str(article["title"]) for article in payload["articles"] if article.get("title")
        ]
    except UpstreamError as exc:
        return list_fallback(key, title, exc.status, unavailable, exc.detail)
    except SHAPE_ERRORS as exc:
        return list_fallback(key, title, "error", unavailable, repr(exc))

    return SectionOutcome(key=key, section=ListSection(title=title, items=items))


async def fetch_news(settings: Settings) -> SectionOutcome:
    return await _fetch_headlines(settings, "news", "Top News", "Top news is unavailable right now.")


async def fetch_sports(settings: Settings) -> SectionOutcome:
    return await _fetch_headlines(
        settings,
        "sports",
        "Sports Updates",
        "Sports updates are unavailable right now.",
        category="sports",
    )
