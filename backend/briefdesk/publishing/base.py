from __future__ import annotations

from typing import Protocol

from briefdesk.schemas.run import PublishResult


class PublishError(Exception):
    """Publishing the snapshot to the remote repository failed."""


class PublishConflictError(PublishError):
    """The remote file changed between the read and the write."""


class Publisher(Protocol):
    def publish(self, content: str, message: str) -> PublishResult:
        ...
