"""The mason endpoint: /fixup, /apply, /merge-base and issue/PR housekeeping."""

from http import HTTPStatus
from typing import Any

from botman.actions.commands import Apply, MergeBase
from botman.actions.common import run_apply, run_merge_base
from botman.actions.errors import ActionError
from botman.actions.executor import CommandSurface
from botman.actions.parser import AuthorizedAction, RawCommand
from botman.adapters.github import GitHubError
from botman.hacktober import label_hacktoberfest
from botman.mason.commands import Fixup, parse_mason_command
from botman.mason.fixup import run_fixup
from botman.models import IssuesEvent, PullRequestEvent

NEW_PACKAGE_LABEL = "new-package-request"
HELP_WANTED_LABEL = "help wanted"
NEW_PACKAGE_COMMENT = (
    "Hello! Pull requests are always very welcomed to add new packages. If the distribution of the "
    "package is simple, the installation will most likely be so as well. See "
    "[CONTRIBUTING.md](https://github.com/williamboman/mason.nvim/blob/main/CONTRIBUTING.md) and the "
    "[API reference](https://github.com/williamboman/mason.nvim/blob/main/doc/reference.md) for more "
    "details! You may also use existing packages as reference."
)


class MasonSurface(CommandSurface):
    name = "mason"

    def parse_command(self, raw: RawCommand) -> Any:
        return parse_mason_command(raw)

    def execute(self, action: AuthorizedAction) -> str:
        command = action.action.command
        if isinstance(command, Fixup):
            return run_fixup(action, self.client, self.config, log=self.log)
        if isinstance(command, Apply):
            return run_apply(action, command.patch, self.client, self.config, log=self.log)
        if isinstance(command, MergeBase):
            return run_merge_base(action, self.client, self.config, log=self.log)
        raise ActionError(HTTPStatus.INTERNAL_SERVER_ERROR, f"Unhandled mason command {command!r}")

    def on_issues(self, event: IssuesEvent) -> HTTPStatus:
        """Greet new package requests and mark them as help wanted."""
        if event.action != "opened" or not event.issue.has_label(NEW_PACKAGE_LABEL):
            return HTTPStatus.NO_CONTENT
        repo = event.repository
        try:
            self.client.create_issue_comment(repo, event.issue.number, NEW_PACKAGE_COMMENT)
        except GitHubError as e:
            self.log.warning("Failed to comment on %s#%s: %s", repo.full_name, event.issue.number, e)
        try:
            self.client.add_labels(repo, event.issue.number, [HELP_WANTED_LABEL])
        except GitHubError as e:
            self.log.warning("Failed to label %s#%s: %s", repo.full_name, event.issue.number, e)
        return HTTPStatus.NO_CONTENT

    def on_pull_request(self, event: PullRequestEvent) -> HTTPStatus:
        if event.action == "closed" and event.pull_request.merged:
            label_hacktoberfest(event, self.client, self.config.github.login)
        return HTTPStatus.NO_CONTENT
