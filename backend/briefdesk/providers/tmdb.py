from __future__ import annotations

from briefdesk.config.settings import Settings
from briefdesk.providers.base import SHAPE_ERRORS, UpstreamError, build_url, get_json, list_fallback
from briefdesk.schemas.provider import SectionOutcome
from briefdesk.schemas.snapshot import ListSection


_TRENDING_PATH = "/3/trending/movie/day"
_TITLE = "Entertainment Buzz"
_UNAVAILABLE = "Trending movies are unavailable right now."


def format_movie(movie: dict, overview_chars: int) -> str:
    overview = movie.get("overview") or ""
    return f"{movie['title']} — {overview[:overview_chars]}..."


async def fetch_movies(settings: Settings) -> SectionOutcome:
    api_key = settings.providers.tmdb_api_key
    if not api_key:
        return list_fallback("entertainment", _TITLE, "missing_key", _UNAVAILABLE)

    url = build_url(settings.providers.tmdb_base_url, _TRENDING_PATH, {"api_key": api_key})
    try:
        payload = await get_json(url, timeout=settings.http_timeout_seconds)
        results = payload["results"][: settings.movie_limit]
        items = [format_movie(movie, settings.overview_chars) for movie in results]
    except UpstreamError as exc:
        return list_fallback("entertainment", _TITLE, exc.status, _UNAVAILABLE, exc.detail)
    except SHAPE_ERRORS as exc:
        return list_fallback("entertainment", _TITLE, "error", _UNAVAILABLE, repr(exc))

    return SectionOutcome(key="entertainment", section=ListSection(title=_TITLE, items=items))
