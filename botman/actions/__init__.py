"""Comment command grammar, event contexts and action errors."""

from botman.actions.context import (
    EventContext,
    IssueCommentContext,
    PullRequestReviewCommentContext,
    PullRequestReviewContext,
)
from botman.actions.errors import ActionError, ActionParseError, NotAllowedError
from botman.actions.parser import (
    Action,
    AuthorizedAction,
    AuthorizedUser,
    Mention,
    RawCommand,
    authorize,
    parse_action,
)
from botman.actions.patch import GitApplyPatch

__all__ = [
    "Action",
    "ActionError",
    "ActionParseError",
    "AuthorizedAction",
    "AuthorizedUser",
    "EventContext",
    "GitApplyPatch",
    "IssueCommentContext",
    "Mention",
    "NotAllowedError",
    "PullRequestReviewCommentContext",
    "PullRequestReviewContext",
    "RawCommand",
    "authorize",
    "parse_action",
]
