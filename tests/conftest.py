"""Shared fixtures: config, a mocked GitHub client and webhook payload builders."""

import json
from typing import Any, Dict
from unittest.mock import Mock

import pytest

from botman.adapters.github import GitHubClient
from botman.config import AppConfig, BotConfig, GitHubConfig
from botman.models import PullRequest

WEBHOOK_SECRET = "s3cret"
BOT_LOGIN = "williambotman"
MAINTAINER = "williamboman"


def repo_payload(full_name: str = "williamboman/mason.nvim", repo_id: int = 1) -> Dict[str, Any]:
    return {"id": repo_id, "full_name": full_name}


def user_payload(login: str = MAINTAINER, user_id: int = 100) -> Dict[str, Any]:
    return {"id": user_id, "login": login}


def pull_request_payload(
    number: int = 42,
    head_repo: str = "contributor/mason.nvim",
    base_repo: str = "williamboman/mason.nvim",
    author: str = "contributor",
    merged: bool = False,
    requested_teams: list | None = None,
) -> Dict[str, Any]:
    return {
        "number": number,
        "merged": merged,
        "user": user_payload(author, 200),
        "requested_teams": requested_teams or [],
        "head": {
            "ref": "feat/new-package",
            "sha": "0123456789abcdef0123456789abcdef01234567",
            "user": user_payload(author, 200),
            "repo": repo_payload(head_repo, 2),
        },
        "base": {
            "ref": "main",
            "sha": "fedcba9876543210fedcba9876543210fedcba98",
            "user": user_payload(MAINTAINER),
            "repo": repo_payload(base_repo, 1),
        },
    }


def comment_payload(body: str | None, login: str = MAINTAINER, comment_id: int = 555) -> Dict[str, Any]:
    return {"id": comment_id, "node_id": f"IC_{comment_id}", "body": body, "user": user_payload(login)}


def issue_comment_payload(
    body: str | None,
    login: str = MAINTAINER,
    action: str = "created",
    with_pr: bool = True,
) -> Dict[str, Any]:
    issue: Dict[str, Any] = {"id": 9000, "number": 42, "user": user_payload("contributor", 200), "labels": []}
    if with_pr:
        issue["pull_request"] = {"url": "https://api.github.com/repos/williamboman/mason.nvim/pulls/42"}
    return {
        "action": action,
        "issue": issue,
        "comment": comment_payload(body, login),
        "repository": repo_payload(),
    }


def as_body(payload: Dict[str, Any]) -> bytes:
    return json.dumps(payload).encode()


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        bot=BotConfig(authorized_users=[MAINTAINER]),
        github=GitHubConfig(login=BOT_LOGIN, pat="test-pat", webhook_secret=WEBHOOK_SECRET),
    )


@pytest.fixture
def pull_request() -> PullRequest:
    return PullRequest.model_validate(pull_request_payload())


@pytest.fixture
def client(pull_request: PullRequest) -> Mock:
    """GitHubClient double whose get_pull_request returns the fixture PR."""
    mock = Mock(spec=GitHubClient)
    mock.get_pull_request.return_value = pull_request
    return mock
