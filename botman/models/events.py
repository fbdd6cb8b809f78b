"""Webhook event envelopes, one per X-GitHub-Event type the bot accepts.

`action` is kept as a plain string: GitHub adds new actions over time and an
unknown action must validate (and then be ignored) rather than fail the
delivery.
"""

from pydantic import BaseModel

from botman.models.github import CheckRun, Comment, Issue, PullRequest, Repo


class IssueCommentEvent(BaseModel):
    """issue_comment: created/edited/deleted comment on an issue or PR."""

    action: str
    issue: Issue
    comment: Comment
    repository: Repo


class PullRequestReviewCommentEvent(BaseModel):
    """pull_request_review_comment: line comment on a PR diff."""

    action: str
    comment: Comment
    pull_request: PullRequest
    repository: Repo


class PullRequestReviewEvent(BaseModel):
    """pull_request_review: submitted/edited/dismissed review."""

    action: str
    review: Comment
    pull_request: PullRequest
    repository: Repo


class IssuesEvent(BaseModel):
    action: str
    issue: Issue
    repository: Repo


class PullRequestEvent(BaseModel):
    action: str
    pull_request: PullRequest
    repository: Repo


class CheckRunEvent(BaseModel):
    action: str
    check_run: CheckRun
    repository: Repo


EVENT_SCHEMAS: dict[str, type[BaseModel]] = {
    "issue_comment": IssueCommentEvent,
    "issues": IssuesEvent,
    "pull_request": PullRequestEvent,
    "check_run": CheckRunEvent,
    "pull_request_review": PullRequestReviewEvent,
    "pull_request_review_comment": PullRequestReviewCommentEvent,
}
