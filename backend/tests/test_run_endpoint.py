import asyncio
import json
import logging
from unittest.mock import patch
from urllib.error import HTTPError, URLError

import pytest
from fastapi import HTTPException

from briefdesk.api.routes import health, root, run_endpoint
from briefdesk.jobs import daily
from briefdesk.schemas.run import PublishResult

from conftest import FakeGitHub


class FakePublisher:
    def __init__(self) -> None:
        self.calls = []

    def publish(self, content: str, message: str) -> PublishResult:
        self.calls.append((content, message))
        return PublishResult(status="updated", path="data.json", branch="main", commit_sha="abc")


def test_liveness() -> None:
    assert root() == "briefdesk is running"
    assert health() == {"status": "ok"}


def test_run_reports_success(fake_settings) -> None:
    publisher = FakePublisher()
    with (
        patch("briefdesk.providers.base.urlopen", side_effect=URLError("offline")),
        patch("briefdesk.jobs.daily.build_publisher", return_value=publisher),
    ):
        response = asyncio.run(run_endpoint(settings=fake_settings))

    assert response.status == "ok"
    assert response.message == "Data updated and pushed."
    assert response.publish.commit_sha == "abc"
    assert "news" in response.degraded_sections

    content, message = publisher.calls[0]
    with open(fake_settings.output_path, encoding="utf-8") as handle:
        assert handle.read() == content
    assert json.loads(content)["lastUpdated"] == response.last_updated
    assert message.startswith("Automated update: ")


def test_run_reports_publish_failure(fake_settings, caplog) -> None:
    caplog.set_level(logging.ERROR)
    github = FakeGitHub(
        {"sha": "old-blob"},
        HTTPError("https://api.github.com", 500, "Server Error", {}, None),
    )
    with (
        patch("briefdesk.providers.base.urlopen", side_effect=URLError("offline")),
        patch("briefdesk.publishing.github.urlopen", new=github),
    ):
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(run_endpoint(settings=fake_settings))

    assert exc_info.value.status_code == 500
    assert exc_info.value.detail["message"] == "Failed to update data."
    assert "HTTP 500" in exc_info.value.detail["error"]
    assert len(github.requests) == 2

    errors = [record for record in caplog.records if record.levelno >= logging.ERROR]
    assert [record.getMessage() for record in errors] == ["run_failed"]
    assert errors[0].exc_info is not None


def test_cli_logs_unexpected_failures(caplog) -> None:
    caplog.set_level(logging.ERROR)
    with patch("briefdesk.jobs.daily.run_daily", side_effect=RuntimeError("boom")):
        exit_code = daily.main()

    assert exit_code == 1
    errors = [record for record in caplog.records if record.levelno >= logging.ERROR]
    assert [record.getMessage() for record in errors] == ["run_failed"]
    assert errors[0].event_data == {"error": "boom"}
