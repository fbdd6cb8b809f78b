"""GitHub REST and GraphQL client."""

import logging
from typing import Any, Dict, List

import requests
from pydantic import ValidationError

from botman.models import Comment, CommentKind, PullRequest, Reaction, Repo

LOG = logging.getLogger("botman.adapters.github")

COMMENT_FOOTER = (
    "\n\n<sup>` 🤖 This is an automated comment. `  "
    "[` 📖 Source code `](https://github.com/williamboman/botman)</sup>"
)

MINIMIZE_COMMENT_MUTATION = """
mutation minimizeComment($input: MinimizeCommentInput!) {
    minimizeComment(input: $input) {
        minimizedComment {
            isMinimized
        }
    }
}
"""

UNMINIMIZE_COMMENT_MUTATION = """
mutation unminimizeComment($input: UnminimizeCommentInput!) {
    unminimizeComment(input: $input) {
        unminimizedComment {
            isMinimized
        }
    }
}
"""


class GitHubError(Exception):
    """Raised when a GitHub API call fails."""

    pass


class GitHubClient:
    """Authenticated GitHub client shared by every delivery.

    Holds no per-request state; requests.Session is only used for its
    connection pool and default headers.
    """

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        graphql_url: str = "https://api.github.com/graphql",
        user_agent: str = "botman (+https://github.com/williamboman/botman)",
        timeout: int = 30,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._graphql_url = graphql_url
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github+json"
        self._session.headers["User-Agent"] = user_agent

    def _url(self, path: str) -> str:
        if path.startswith("https://") or path.startswith("http://"):
            return path
        return f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"

    def _request(
        self,
        method: str,
        path: str,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = self._url(path)
        try:
            resp = self._session.request(method, url, json=json, timeout=self._timeout)
        except requests.RequestException as e:
            raise GitHubError(f"{method} {url}: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except ValueError:
                pass
            raise GitHubError(f"{method} {url}: {resp.status_code}: {msg}")
        return resp

    def get_pull_request(self, url: str) -> PullRequest:
        """Fetch a pull request by its API URL (as linked from an issue)."""
        resp = self._request("GET", url)
        try:
            return PullRequest.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise GitHubError(f"GET {url}: unexpected pull request payload: {e}") from e

    def create_issue_comment(self, repo: Repo, issue_number: int, body: str) -> Dict[str, Any]:
        """Post a comment on an issue or PR, with the automated-comment footer."""
        LOG.info("Commenting on %s#%s", repo.full_name, issue_number)
        resp = self._request(
            "POST",
            f"/repos/{repo.full_name}/issues/{issue_number}/comments",
            json={"body": body + COMMENT_FOOTER},
        )
        return resp.json()

    def create_comment_reaction(self, repo: Repo, comment: Comment, reaction: Reaction) -> None:
        """React to an issue comment or a review comment."""
        if comment.kind == CommentKind.ISSUE_COMMENT:
            path = f"/repos/{repo.full_name}/issues/comments/{comment.id}/reactions"
        elif comment.kind == CommentKind.REVIEW_COMMENT:
            path = f"/repos/{repo.full_name}/pulls/comments/{comment.id}/reactions"
        else:
            raise GitHubError(f"{comment.kind.value} {comment.id} does not support reactions")
        LOG.info("Reacting %s to %s %s in %s", reaction.value, comment.kind.value, comment.id, repo.full_name)
        self._request("POST", path, json={"content": reaction.value})

    def add_labels(self, repo: Repo, issue_number: int, labels: List[str]) -> None:
        LOG.info("Adding labels %s to %s#%s", labels, repo.full_name, issue_number)
        self._request("POST", f"/repos/{repo.full_name}/issues/{issue_number}/labels", json={"labels": labels})

    def request_reviewers(
        self,
        repo: Repo,
        pr_number: int,
        reviewers: List[str] | None = None,
        team_reviewers: List[str] | None = None,
    ) -> None:
        LOG.info("Requesting review on %s#%s from %s %s", repo.full_name, pr_number, reviewers, team_reviewers)
        self._request(
            "POST",
            f"/repos/{repo.full_name}/pulls/{pr_number}/requested_reviewers",
            json={"reviewers": reviewers or [], "team_reviewers": team_reviewers or []},
        )

    def graphql(self, query: str, variables: Dict[str, Any] | None = None) -> Dict[str, Any]:
        """Run a GraphQL query and return its data; raise on any reported error."""
        envelope = self._request("POST", self._graphql_url, json={"query": query, "variables": variables}).json()
        data = envelope.get("data")
        errors = envelope.get("errors")
        if errors:
            messages = [err.get("message", "") for err in errors]
            raise GitHubError(f"GraphQL errors: {messages}")
        if data is None:
            raise GitHubError("GraphQL response is missing both data and errors")
        return data

    def minimize_comment(self, comment: Comment) -> None:
        """Hide a comment as resolved."""
        LOG.info("Minimizing comment %s", comment.id)
        data = self.graphql(
            MINIMIZE_COMMENT_MUTATION,
            {"input": {"classifier": "RESOLVED", "clientMutationId": None, "subjectId": comment.node_id}},
        )
        if not data["minimizeComment"]["minimizedComment"]["isMinimized"]:
            raise GitHubError(f"Failed to minimize comment {comment.id}")

    def unminimize_comment(self, comment: Comment) -> None:
        LOG.info("Unminimizing comment %s", comment.id)
        data = self.graphql(
            UNMINIMIZE_COMMENT_MUTATION,
            {"input": {"clientMutationId": None, "subjectId": comment.node_id}},
        )
        if data["unminimizeComment"]["unminimizedComment"]["isMinimized"]:
            raise GitHubError(f"Failed to unminimize comment {comment.id}")
