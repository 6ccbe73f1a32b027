from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ListSection(BaseModel):
    title: str
    items: list[str] = Field(default_factory=list)


class ContentSection(BaseModel):
    title: str
    content: str


class Snapshot(BaseModel):
    """The aggregated document written to disk and published each run."""

    model_config = ConfigDict(populate_by_name=True)

    last_updated: str = Field(alias="lastUpdated")
    news: ListSection
    sports: ListSection
    entertainment: ListSection
    weather: ListSection
    markets: ListSection
    quote: ContentSection
    fact: ContentSection
    history: ContentSection
    trends: ListSection
