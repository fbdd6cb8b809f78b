"""Turn a verified delivery into a surface call.

Comments are only parsed when created and reviews only when submitted; any
other action on those events is acknowledged with 204 and ignored.
"""

import logging
from http import HTTPStatus

from pydantic import ValidationError

from botman.actions.context import (
    IssueCommentContext,
    PullRequestReviewCommentContext,
    PullRequestReviewContext,
)
from botman.actions.executor import CommandSurface
from botman.models import (
    EVENT_SCHEMAS,
    CheckRunEvent,
    IssueCommentEvent,
    IssuesEvent,
    PullRequestEvent,
    PullRequestReviewCommentEvent,
    PullRequestReviewEvent,
)

LOG = logging.getLogger("botman.webhook.router")


def route_event(surface: CommandSurface, event_name: str, body: bytes) -> HTTPStatus:
    """Deserialize body as event_name and hand it to surface.

    Returns 501 for event types the bot has no schema for, 422 for bodies
    that are not valid JSON for that schema, otherwise the surface's status.
    """
    schema = EVENT_SCHEMAS.get(event_name)
    if schema is None:
        LOG.info("Ignoring unsupported event %s on %s", event_name, surface.name)
        return HTTPStatus.NOT_IMPLEMENTED
    try:
        event = schema.model_validate_json(body)
    except ValidationError as e:
        LOG.warning("Invalid %s payload: %s", event_name, e)
        return HTTPStatus.UNPROCESSABLE_ENTITY

    if isinstance(event, IssueCommentEvent):
        if event.action != "created":
            return HTTPStatus.NO_CONTENT
        return surface.handle_command(IssueCommentContext(event, surface.client))
    if isinstance(event, PullRequestReviewCommentEvent):
        if event.action != "created":
            return HTTPStatus.NO_CONTENT
        return surface.handle_command(PullRequestReviewCommentContext(event))
    if isinstance(event, PullRequestReviewEvent):
        if event.action != "submitted":
            return HTTPStatus.NO_CONTENT
        return surface.handle_command(PullRequestReviewContext(event))
    if isinstance(event, IssuesEvent):
        return surface.on_issues(event)
    if isinstance(event, PullRequestEvent):
        return surface.on_pull_request(event)
    if isinstance(event, CheckRunEvent):
        return surface.on_check_run(event)
    return HTTPStatus.NOT_IMPLEMENTED
