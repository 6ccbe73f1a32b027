from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from briefdesk.schemas.snapshot import ContentSection, ListSection

OutcomeStatus = Literal["ok", "missing_key", "rate_limited", "error", "empty"]


class SectionOutcome(BaseModel):
    key: str
    section: ListSection | ContentSection
    status: OutcomeStatus = "ok"

    @property
    def degraded(self) -> bool:
        return self.status != "ok"
