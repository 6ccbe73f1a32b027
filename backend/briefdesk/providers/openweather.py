from __future__ import annotations

import asyncio

from briefdesk.config.settings import Settings
from briefdesk.providers.base import (
    SHAPE_ERRORS,
    UpstreamError,
    build_url,
    format_number,
    get_json,
    list_fallback,
)
from briefdesk.schemas.provider import SectionOutcome
from briefdesk.schemas.snapshot import ListSection


_WEATHER_PATH = "/data/2.5/weather"
_TITLE = "Weather Today"
_UNAVAILABLE = "Weather is unavailable right now."


async def _fetch_city(settings: Settings, city: str, api_key: str) -> str:
    url = build_url(
        settings.providers.weather_base_url,
        _WEATHER_PATH,
        {"q": city, "appid": api_key, "units": "metric"},
    )
    payload = await get_json(url, timeout=settings.http_timeout_seconds)
    temp = format_number(payload["main"]["temp"])
    condition = payload["weather"][0]["description"]
    return f"{city}: {temp}°C, {condition}"


async def fetch_weather(settings: Settings) -> SectionOutcome:
    api_key = settings.providers.weather_api_key
    if not api_key:
        return list_fallback("weather", _TITLE, "missing_key", _UNAVAILABLE)

    try:
        # gather keeps the configured city order
        items = await asyncio.gather(
            *(_fetch_city(settings, city, api_key) for city in settings.weather_cities)
        )
    except UpstreamError as exc:
        return list_fallback("weather", _TITLE, exc.status, _UNAVAILABLE, exc.detail)
    except SHAPE_ERRORS as exc:
        return list_fallback("weather", _TITLE, "error", _UNAVAILABLE, repr(exc))

    return SectionOutcome(key="weather", section=ListSection(title=_TITLE, items=list(items)))
