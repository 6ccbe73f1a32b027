from __future__ import annotations

import asyncio
import http.client
import json
from typing import Any
from urllib.error import HTTPError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from briefdesk.logging_config import get_logger, log_event
from briefdesk.schemas.provider import OutcomeStatus, SectionOutcome
from briefdesk.schemas.snapshot import ContentSection, ListSection

logger = get_logger(__name__)

_USER_AGENT = "briefdesk/0.1"

# Raised by upstream payloads that lack the fields a section projects.
SHAPE_ERRORS = (KeyError, IndexError, TypeError, AttributeError)


class UpstreamError(Exception):
    def __init__(self, status: OutcomeStatus, detail: str = "") -> None:
        super().__init__(detail or status)
        self.status = status
        self.detail = detail


def build_url(base_url: str, path: str, params: dict[str, str] | None = None) -> str:
    url = f"{base_url.rstrip('/')}{path}"
    if params:
        url = f"{url}?{urlencode(params)}"
    return url


def _read_json(url: str, timeout: float) -> Any:
    request = Request(url, headers={"Accept": "application/json", "User-Agent": _USER_AGENT})
    try:
        with urlopen(request, timeout=timeout) as response:
            body = response.read().decode("utf-8")
        return json.loads(body)
    except HTTPError as exc:
        status = "rate_limited" if exc.code == 429 else "error"
        raise UpstreamError(status, f"HTTP {exc.code}") from exc
    except (OSError, http.client.HTTPException, json.JSONDecodeError, UnicodeDecodeError) as exc:
        # OSError covers URLError, resets and timeouts; HTTPException covers
        # disconnects and short reads that urllib does not wrap
        raise UpstreamError("error", str(exc)) from exc


async def get_json(url: str, timeout: float = 10.0) -> Any:
    """GET a JSON document without blocking the event loop."""
    return await asyncio.to_thread(_read_json, url, timeout)


def format_number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _log_fallback(key: str, status: OutcomeStatus, detail: str) -> None:
    data = {"section": key, "status": status}
    if detail:
        data["detail"] = detail
    log_event(logger, "warning", "section_fallback", data)


def list_fallback(
    key: str, title: str, status: OutcomeStatus, message: str, detail: str = ""
) -> SectionOutcome:
    _log_fallback(key, status, detail)
    return SectionOutcome(
        key=key,
        section=ListSection(title=title, items=[message]),
        status=status,
    )


def content_fallback(
    key: str, title: str, status: OutcomeStatus, message: str, detail: str = ""
) -> SectionOutcome:
    _log_fallback(key, status, detail)
    return SectionOutcome(
        key=key,
        section=ContentSection(title=title, content=message),
        status=status,
    )
