from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class PublishResult(BaseModel):
    status: Literal["created", "updated"]
    path: str
    branch: str
    content_sha: Optional[str] = None
    commit_sha: Optional[str] = None


class RunResult(BaseModel):
    last_updated: str
    output_path: str
    degraded_sections: list[str] = Field(default_factory=list)
    publish: PublishResult


class RunResponse(BaseModel):
    status: Literal["ok"] = "ok"
    message: str
    last_updated: str
    degraded_sections: list[str] = Field(default_factory=list)
    publish: PublishResult
