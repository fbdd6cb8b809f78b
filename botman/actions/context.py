"""Where a command came from: repository, triggering comment, pull request."""

from abc import ABC, abstractmethod

from botman.adapters.github import GitHubClient
from botman.models import (
    Comment,
    CommentKind,
    IssueCommentEvent,
    PullRequest,
    PullRequestReviewCommentEvent,
    PullRequestReviewEvent,
    Repo,
)


class EventContext(ABC):
    """Capability shared by every event shape that can carry a command."""

    @abstractmethod
    def get_pull_request(self) -> PullRequest | None:
        """Pull request the trigger belongs to; may hit the network."""
        ...

    @abstractmethod
    def get_repo(self) -> Repo:
        """Repository the trigger lives in (where reactions are posted)."""
        ...

    @abstractmethod
    def get_trigger(self) -> Comment:
        """Comment or review holding the command text."""
        ...


class IssueCommentContext(EventContext):
    """Comment in an issue's conversation; the PR, if any, must be fetched."""

    def __init__(self, event: IssueCommentEvent, client: GitHubClient) -> None:
        self._event = event
        self._client = client
        self._trigger = event.comment.model_copy(update={"kind": CommentKind.ISSUE_COMMENT})

    def get_pull_request(self) -> PullRequest | None:
        link = self._event.issue.pull_request
        if link is None:
            return None
        return self._client.get_pull_request(link.url)

    def get_repo(self) -> Repo:
        return self._event.repository

    def get_trigger(self) -> Comment:
        return self._trigger

    def __repr__(self) -> str:
        return f"IssueCommentContext({self._event.repository.full_name}#{self._event.issue.number})"


class PullRequestReviewCommentContext(EventContext):
    """Line comment on a PR diff; the PR is embedded in the payload."""

    def __init__(self, event: PullRequestReviewCommentEvent) -> None:
        self._event = event
        self._trigger = event.comment.model_copy(update={"kind": CommentKind.REVIEW_COMMENT})

    def get_pull_request(self) -> PullRequest | None:
        return self._event.pull_request

    def get_repo(self) -> Repo:
        return self._event.pull_request.base.repo or self._event.repository

    def get_trigger(self) -> Comment:
        return self._trigger

    def __repr__(self) -> str:
        return f"PullRequestReviewCommentContext({self.get_repo().full_name}#{self._event.pull_request.number})"


class PullRequestReviewContext(EventContext):
    """Submitted review; the PR is embedded in the payload."""

    def __init__(self, event: PullRequestReviewEvent) -> None:
        self._event = event
        self._trigger = event.review.model_copy(update={"kind": CommentKind.REVIEW})

    def get_pull_request(self) -> PullRequest | None:
        return self._event.pull_request

    def get_repo(self) -> Repo:
        return self._event.pull_request.base.repo or self._event.repository

    def get_trigger(self) -> Comment:
        return self._trigger

    def __repr__(self) -> str:
        return f"PullRequestReviewContext({self.get_repo().full_name}#{self._event.pull_request.number})"
