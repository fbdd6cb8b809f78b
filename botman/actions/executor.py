"""Bot surfaces: command parsing, dispatch and failure compensation.

A surface owns a closed set of command variants. Comment-like events are
authorized, dispatched to the surface's handler and, on failure, the trigger
is un-minimized and given a -1 reaction. Other event types go to the
on_* hooks, which answer 501 unless a surface overrides them.
"""

import logging
from abc import ABC, abstractmethod
from http import HTTPStatus
from typing import Any

from botman.actions.context import EventContext
from botman.actions.errors import ActionError, ActionParseError
from botman.actions.parser import AuthorizedAction, RawCommand, authorize
from botman.adapters.github import GitHubClient, GitHubError
from botman.config import AppConfig
from botman.models import CheckRunEvent, IssuesEvent, PullRequestEvent, Reaction


class CommandSurface(ABC):
    """One webhook endpoint with its own command set and housekeeping."""

    name = "surface"

    def __init__(self, client: GitHubClient, config: AppConfig, log: logging.Logger | None = None) -> None:
        self.client = client
        self.config = config
        self.log = log or logging.getLogger(f"botman.{self.name}")

    @abstractmethod
    def parse_command(self, raw: RawCommand) -> Any:
        """Map a raw command onto this surface's variants.

        Raises:
            ActionParseError: For unknown names or bad arguments.
        """
        ...

    @abstractmethod
    def execute(self, action: AuthorizedAction) -> str:
        """Run the handler for action.command and return a result line.

        Raises:
            ActionError: If the handler fails.
        """
        ...

    def handle_command(self, context: EventContext) -> HTTPStatus:
        """Authorize, execute and compensate; the returned status goes to GitHub."""
        try:
            action = authorize(
                context,
                self.parse_command,
                authorized_users=self.config.bot.authorized_users,
                mentionable=self.config.mentionable_users,
            )
        except ActionParseError as e:
            self.log.info("Failed to parse action from %r: %s", context, e)
            return HTTPStatus.NO_CONTENT

        self.log.info(
            "%s requested %s from %s in %r",
            action.authorized_by.login,
            action.action.command,
            action.action.actionee,
            context,
        )
        try:
            result = self.execute(action)
        except ActionError as e:
            self.log.error("Action failed with %s: %s", e.status.value, e, exc_info=True)
            self.compensate(context)
            return e.status
        self.log.info("%s", result)
        return HTTPStatus.NO_CONTENT

    def compensate(self, context: EventContext) -> None:
        """Restore the trigger's visibility and mark it -1; both best-effort."""
        trigger = context.get_trigger()
        if not trigger.reactable:
            self.log.info("Trigger %s is a review; skipping unminimize and reaction", trigger.id)
            return
        try:
            self.client.unminimize_comment(trigger)
        except GitHubError as e:
            self.log.warning("Failed to unminimize comment %s: %s", trigger.id, e)
        try:
            self.client.create_comment_reaction(context.get_repo(), trigger, Reaction.MINUS_ONE)
        except GitHubError as e:
            self.log.warning("Failed to react to comment %s: %s", trigger.id, e)

    def on_issues(self, event: IssuesEvent) -> HTTPStatus:
        return HTTPStatus.NOT_IMPLEMENTED

    def on_pull_request(self, event: PullRequestEvent) -> HTTPStatus:
        return HTTPStatus.NOT_IMPLEMENTED

    def on_check_run(self, event: CheckRunEvent) -> HTTPStatus:
        return HTTPStatus.NOT_IMPLEMENTED
