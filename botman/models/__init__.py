"""Data models for GitHub payloads (Pydantic)."""

from botman.models.events import (
    EVENT_SCHEMAS,
    CheckRunEvent,
    IssueCommentEvent,
    IssuesEvent,
    PullRequestEvent,
    PullRequestReviewCommentEvent,
    PullRequestReviewEvent,
)
from botman.models.github import (
    CheckRun,
    CheckRunPullRequest,
    Comment,
    CommentKind,
    Issue,
    IssuePullRequestLink,
    Label,
    PullRequest,
    Reaction,
    Ref,
    Repo,
    Team,
    User,
)

__all__ = [
    "EVENT_SCHEMAS",
    "CheckRun",
    "CheckRunEvent",
    "CheckRunPullRequest",
    "Comment",
    "CommentKind",
    "Issue",
    "IssueCommentEvent",
    "IssuePullRequestLink",
    "IssuesEvent",
    "Label",
    "PullRequest",
    "PullRequestEvent",
    "PullRequestReviewCommentEvent",
    "PullRequestReviewEvent",
    "Reaction",
    "Ref",
    "Repo",
    "Team",
    "User",
]
