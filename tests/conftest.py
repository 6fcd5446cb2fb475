"""Shared pytest fixtures and configuration."""

from unittest.mock import Mock

import pytest

from models.data_models import PullRequestRecord


def make_pr_payload(number: int, login: str = "external-dev", **overrides) -> dict:
    """Build a PR object shaped like the GitHub pulls list endpoint returns."""
    payload = {
        "id": 1000 + number,
        "number": number,
        "title": f"PR {number}",
        "user": {"login": login, "avatar_url": f"https://avatars.example/{login}"},
        "html_url": f"https://github.com/expo/expo/pull/{number}",
        "created_at": "2025-01-05T10:30:00Z",
        "updated_at": "2025-01-06T08:00:00Z",
        "state": "open",
        "labels": [],
        "assignees": [],
        "requested_reviewers": [],
        # Extra fields the API sends that the viewer ignores
        "body": "Fixes a thing",
        "draft": False,
    }
    payload.update(overrides)
    return payload


def make_pr(number: int, login: str = "external-dev", **overrides) -> PullRequestRecord:
    return PullRequestRecord.model_validate(make_pr_payload(number, login, **overrides))


def make_response(payload=None, status_code: int = 200, reason: str = "OK") -> Mock:
    """Mock requests.Response for a page of results."""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = reason
    response.text = "" if payload is None else str(payload)[:200]
    response.headers = {"X-RateLimit-Remaining": "4999", "X-RateLimit-Limit": "5000"}
    response.json.return_value = payload
    return response


def make_page(page: int, size: int, login: str = "external-dev") -> list[dict]:
    start = (page - 1) * 1000
    return [make_pr_payload(start + i + 1, login) for i in range(size)]


@pytest.fixture
def test_env(monkeypatch):
    """
    Set up a complete, valid environment for config loading.
    """
    monkeypatch.setattr("utils.config_loader.load_dotenv", lambda **kwargs: False)
    monkeypatch.delenv("GITHUB_API_URL", raising=False)
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test_token_1234567890")
    monkeypatch.setenv("GITHUB_REPO", "facebook/react")
    monkeypatch.setenv("EXCLUDED_AUTHORS", "gaearon, acdlite,,gaearon")
    monkeypatch.setenv("PER_PAGE", "50")
    monkeypatch.setenv("MAX_PAGES", "3")
    monkeypatch.setenv("REQUEST_TIMEOUT", "10")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    return {
        "github_token": "ghp_test_token_1234567890",
        "owner": "facebook",
        "name": "react",
        "excluded_authors": ["gaearon", "acdlite"],
        "per_page": 50,
        "max_pages": 3,
        "log_level": "DEBUG",
    }


@pytest.fixture
def empty_env(monkeypatch):
    """
    Clear every setting so defaults apply.
    """
    for name in (
        "GITHUB_TOKEN",
        "GITHUB_REPO",
        "EXCLUDED_AUTHORS",
        "PER_PAGE",
        "MAX_PAGES",
        "REQUEST_TIMEOUT",
        "GITHUB_API_URL",
        "LOG_LEVEL",
        "CORS_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)
    # load_dotenv never overrides variables that are already set
    monkeypatch.setattr("utils.config_loader.load_dotenv", lambda **kwargs: False)


@pytest.fixture
def invalid_env(monkeypatch):
    """
    Set up invalid environment variables for testing validation.
    """
    monkeypatch.setattr("utils.config_loader.load_dotenv", lambda **kwargs: False)
    monkeypatch.setenv("PER_PAGE", "500")
    monkeypatch.setenv("MAX_PAGES", "0")


@pytest.fixture
def pr_payload():
    """Factory for raw PR payload dicts: pr_payload(number, login, **overrides)."""
    return make_pr_payload


@pytest.fixture
def pr_record():
    """Factory for parsed records: pr_record(number, login, **overrides)."""
    return make_pr


@pytest.fixture
def page_payload():
    """Factory for a page of PR payloads: page_payload(page, size, login)."""
    return make_page


@pytest.fixture
def fake_response():
    """Factory for mocked responses: fake_response(payload, status_code, reason)."""
    return make_response
