from __future__ import annotations

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


_INDEX_QUOTES_PATH = "/api/v3/quotes/index"
_TITLE = "Market Snapshot"
_UNAVAILABLE = "Market data is unavailable right now."


def _normalize_symbol(symbol: str) -> str:
    return symbol.strip().upper()


async def fetch_markets(settings: Settings) -> SectionOutcome:
    api_key = settings.providers.market_api_key
    if not api_key:
        return list_fallback("markets", _TITLE, "missing_key", _UNAVAILABLE)

    wanted = {_normalize_symbol(symbol) for symbol in settings.market_symbols}
    url = build_url(settings.providers.market_base_url, _INDEX_QUOTES_PATH, {"apikey": api_key})
    try:
        payload = await get_json(url, timeout=settings.http_timeout_seconds)
        if not isinstance(payload, list):
            # FMP reports bad keys and plan limits as an object
            raise TypeError(f"expected a list of quotes, got {type(payload).__name__}")
        items = [
            f"{quote.get('name') or quote['symbol']}: {format_number(quote['price'])}"
            for quote in payload
            if _normalize_symbol(str(quote.get("symbol", ""))) in wanted
        ]
    except UpstreamError as exc:
        return list_fallback("markets", _TITLE, exc.status, _UNAVAILABLE, exc.detail)
    except SHAPE_ERRORS as exc:
        return list_fallback("markets", _TITLE, "error", _UNAVAILABLE, repr(exc))

    if not items:
        return list_fallback(
            "markets", _TITLE, "empty", _UNAVAILABLE, "no quotes for " + ", ".join(sorted(wanted))
        )

    return SectionOutcome(key="markets", section=ListSection(title=_TITLE, items=items))
