"""Shared test fixtures."""

import logging

import pytest

from hotln.models import CreatedIssue, IssueRequest

_HOTLINE_ENV = (
    "HOTLINE_PROFILE",
    "HOTLINE_API_KEY",
    "HOTLINE_TEAM_ID",
    "HOTLINE_PROJECT_ID",
    "HOTLINE_ENDPOINT",
    "HOTLINE_PROXY_URL",
    "HOTLINE_PROXY_TOKEN",
    "HOTLINE_LOG_LEVEL",
    "HOTLINE_LOG_JSON",
    "HOTLINE_RELAY_API_KEY",
    "HOTLINE_RELAY_TEAM_ID",
    "HOTLINE_RELAY_PROJECT_ID",
    "HOTLINE_RELAY_ENDPOINT",
    "HOTLINE_RELAY_TOKEN",
    "HOTLINE_RELAY_RATE_LIMIT_MAX",
    "HOTLINE_RELAY_RATE_LIMIT_WINDOW_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Keep the developer's HOTLINE_* env and any .env file out of the tests."""
    for name in _HOTLINE_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def reset_hotln_logger():
    yield
    logger = logging.getLogger("hotln")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def system_info() -> list[tuple[str, str]]:
    return [("OS", "macos"), ("Arch", "aarch64")]


@pytest.fixture
def issue_request(system_info: list[tuple[str, str]]) -> IssueRequest:
    return IssueRequest(title="crash on startup", description="details...", system_info=system_info)


@pytest.fixture
def created_issue() -> CreatedIssue:
    return CreatedIssue(url="https://linear.app/empathic/issue/EMP-42", identifier="EMP-42")
