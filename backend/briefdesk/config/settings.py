from __future__ import annotations

from typing import List

from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BRIEFDESK_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    news_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("NEWS_API_KEY", "BRIEFDESK_NEWS_API_KEY"),
    )
    weather_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("WEATHER_API_KEY", "BRIEFDESK_WEATHER_API_KEY"),
    )
    tmdb_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("TMDB_API_KEY", "BRIEFDESK_TMDB_API_KEY"),
    )
    market_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("MARKET_API_KEY", "BRIEFDESK_MARKET_API_KEY"),
    )

    news_base_url: str = "https://newsapi.org"
    weather_base_url: str = "https://api.openweathermap.org"
    tmdb_base_url: str = "https://api.themoviedb.org"
    market_base_url: str = "https://financialmodelingprep.com"
    quote_base_url: str = "https://api.quotable.io"
    fact_base_url: str = "https://uselessfacts.jsph.pl"
    history_base_url: str = "https://history.muffinlabs.com"


class PublisherSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BRIEFDESK_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_TOKEN", "BRIEFDESK_GITHUB_TOKEN"),
    )
    owner: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_OWNER", "BRIEFDESK_GITHUB_OWNER"),
    )
    repo: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_REPO", "BRIEFDESK_GITHUB_REPO"),
    )
    branch: str = Field(
        default="main",
        validation_alias=AliasChoices("GITHUB_BRANCH", "BRIEFDESK_GITHUB_BRANCH"),
    )
    path: str = Field(
        default="data.json",
        validation_alias=AliasChoices("GITHUB_PATH", "BRIEFDESK_GITHUB_PATH"),
    )
    api_base_url: str = "https://api.github.com"
    committer_name: str = "briefdesk-bot"
    committer_email: str = "briefdesk-bot@users.noreply.github.com"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BRIEFDESK_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    port: int = Field(
        default=8000,
        validation_alias=AliasChoices("PORT", "BRIEFDESK_PORT"),
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "BRIEFDESK_LOG_LEVEL"),
    )
    output_path: str = "data.json"
    http_timeout_seconds: float = 10.0

    news_country: str = "in"
    news_page_size: int = 5
    weather_cities: List[str] = Field(default_factory=lambda: ["Delhi", "Hyderabad"])
    movie_limit: int = 5
    overview_chars: int = 100
    market_symbols: List[str] = Field(default_factory=lambda: ["^BSESN", "^NSEI"])
    trend_tags: List[str] = Field(
        default_factory=lambda: [
            "#WhatHappenedToday",
            "#NewsUpdate",
            "#India",
            "#World",
            "#Inspiration",
        ]
    )

    providers: ProviderSettings = Field(default_factory=ProviderSettings)
    publisher: PublisherSettings = Field(default_factory=PublisherSettings)


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
