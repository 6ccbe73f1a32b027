from __future__ import annotations

import base64
import http.client
import json
from urllib.error import HTTPError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from briefdesk.config.settings import PublisherSettings
from briefdesk.logging_config import get_logger, log_event
from briefdesk.publishing.base import PublishConflictError, PublishError
from briefdesk.schemas.run import PublishResult

logger = get_logger(__name__)

_NETWORK_ERRORS = (OSError, http.client.HTTPException)


class GitHubContentsPublisher:
    """Writes one file through the GitHub "contents" endpoints.

    The current blob sha is read first and sent back with the update; a 404
    on the read means the file does not exist yet and it is created instead.
    """

    def __init__(self, config: PublisherSettings, timeout: float = 10.0) -> None:
        self.config = config
        self.timeout = timeout

    def _contents_url(self) -> str:
        base_url = self.config.api_base_url.rstrip("/")
        path = quote(self.config.path.lstrip("/"))
        return f"{base_url}/repos/{self.config.owner}/{self.config.repo}/contents/{path}"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"token {self.config.github_token}",
            "Accept": "application/vnd.github+json",
            "User-Agent": self.config.committer_name,
        }

    def _check_config(self) -> None:
        missing = [
            name
            for name, value in (
                ("github_token", self.config.github_token),
                ("owner", self.config.owner),
                ("repo", self.config.repo),
            )
            if not value
        ]
        if missing:
            raise PublishError("Missing publisher settings: " + ", ".join(missing))

    def fetch_sha(self) -> str | None:
        """Return the conflict token of the remote file, or None if it does not exist."""
        url = f"{self._contents_url()}?{urlencode({'ref': self.config.branch})}"
        request = Request(url, headers=self._headers())
        try:
            with urlopen(request, timeout=self.timeout) as response:
                payload = json.loads(response.read().decode("utf-8"))
        except HTTPError as exc:
            if exc.code == 404:
                return None
            raise PublishError(f"Reading {self.config.path} failed with HTTP {exc.code}") from exc
        except (*_NETWORK_ERRORS, json.JSONDecodeError) as exc:
            raise PublishError(f"Reading {self.config.path} failed: {exc}") from exc

        if not isinstance(payload, dict) or not payload.get("sha"):
            raise PublishError(f"{self.config.path} is not a file in {self.config.repo}")
        return payload["sha"]

    def put_contents(self, content: str, message: str, sha: str | None) -> dict:
        body = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": self.config.branch,
            "committer": {
                "name": self.config.committer_name,
                "email": self.config.committer_email,
            },
        }
        if sha:
            body["sha"] = sha

        headers = {**self._headers(), "Content-Type": "application/json"}
        request = Request(
            self._contents_url(),
            data=json.dumps(body).encode("utf-8"),
            headers=headers,
            method="PUT",
        )
        try:
            with urlopen(request, timeout=self.timeout) as response:
                raw = response.read().decode("utf-8")
        except HTTPError as exc:
            if exc.code in (409, 422):
                raise PublishConflictError(
                    f"Writing {self.config.path} was rejected with HTTP {exc.code}"
                ) from exc
            raise PublishError(f"Writing {self.config.path} failed with HTTP {exc.code}") from exc
        except _NETWORK_ERRORS as exc:
            raise PublishError(f"Writing {self.config.path} failed: {exc}") from exc

        try:
            payload = json.loads(raw) if raw else {}
        except json.JSONDecodeError:
            payload = {}
        return payload if isinstance(payload, dict) else {}

    def publish(self, content: str, message: str) -> PublishResult:
        self._check_config()
        sha = self.fetch_sha()
        payload = self.put_contents(content, message, sha)

        result = PublishResult(
            status="updated" if sha else "created",
            path=self.config.path,
            branch=self.config.branch,
            content_sha=(payload.get("content") or {}).get("sha"),
            commit_sha=(payload.get("commit") or {}).get("sha"),
        )
        log_event(logger, "info", "publish_complete", result.model_dump())
        return result
