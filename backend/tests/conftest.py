import json

import pytest

from briefdesk.config.settings import ProviderSettings, PublisherSettings, Settings


class FakeResponse:
    def __init__(self, payload) -> None:
        self.body = json.dumps(payload).encode("utf-8")

    def read(self) -> bytes:
        return self.body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info) -> bool:
        return False


class FakeGitHub:
    """Stands in for urlopen, replaying one response or error per request."""

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request, timeout=None):
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return FakeResponse(response)


@pytest.fixture
def fake_settings(tmp_path) -> Settings:
    return Settings(
        output_path=str(tmp_path / "data.json"),
        providers=ProviderSettings(
            news_api_key="news-key",
            weather_api_key="weather-key",
            tmdb_api_key="tmdb-key",
            market_api_key="market-key",
        ),
        publisher=PublisherSettings(
            github_token="gh-token",
            owner="octo",
            repo="daily",
            branch="main",
            path="data.json",
        ),
    )
