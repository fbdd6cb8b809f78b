"""The mason-registry endpoint: commands, triage pings and renovate review requests."""

from http import HTTPStatus
from typing import Any

from botman.actions.commands import Apply, MergeBase
from botman.actions.common import run_apply, run_merge_base
from botman.actions.errors import ActionError
from botman.actions.executor import CommandSurface
from botman.actions.parser import AuthorizedAction, RawCommand
from botman.adapters.github import GitHubError
from botman.models import CheckRunEvent, IssuesEvent
from botman.registry.commands import RegistryFixup, parse_registry_command
from botman.registry.fixup import run_registry_fixup

TRIAGE_MENTION = "@mason-org/triage"
TRIAGE_TEAM = "triage"
RENOVATE_LOGIN = "renovate[bot]"
FAILED_CONCLUSIONS = frozenset({"failure", "cancelled", "startup_failure", "timed_out"})


class RegistrySurface(CommandSurface):
    name = "registry"

    def parse_command(self, raw: RawCommand) -> Any:
        return parse_registry_command(raw)

    def execute(self, action: AuthorizedAction) -> str:
        command = action.action.command
        if isinstance(command, RegistryFixup):
            return run_registry_fixup(action, self.client, self.config, log=self.log)
        if isinstance(command, Apply):
            return run_apply(action, command.patch, self.client, self.config, log=self.log)
        if isinstance(command, MergeBase):
            return run_merge_base(action, self.client, self.config, log=self.log)
        raise ActionError(HTTPStatus.INTERNAL_SERVER_ERROR, f"Unhandled mason-registry command {command!r}")

    def on_issues(self, event: IssuesEvent) -> HTTPStatus:
        """Ping triage on every newly opened issue (not pull requests)."""
        if event.action != "opened" or event.issue.pull_request is not None:
            return HTTPStatus.NO_CONTENT
        try:
            self.client.create_issue_comment(event.repository, event.issue.number, TRIAGE_MENTION)
        except GitHubError as e:
            self.log.error("Failed to ping triage on %s#%s: %s", event.repository.full_name, event.issue.number, e)
            return HTTPStatus.INTERNAL_SERVER_ERROR
        return HTTPStatus.NO_CONTENT

    def on_check_run(self, event: CheckRunEvent) -> HTTPStatus:
        """Ask triage to look at renovate PRs whose checks failed."""
        check_run = event.check_run
        if check_run.status != "completed" or check_run.conclusion not in FAILED_CONCLUSIONS:
            return HTTPStatus.NO_CONTENT
        if not check_run.pull_requests:
            return HTTPStatus.NO_CONTENT
        try:
            pr = self.client.get_pull_request(check_run.pull_requests[0].url)
        except GitHubError as e:
            self.log.error("Failed to fetch pull request for check run %s: %s", check_run.id, e)
            return HTTPStatus.INTERNAL_SERVER_ERROR

        author = pr.user.login if pr.user else None
        if author != RENOVATE_LOGIN or pr.requested_teams:
            return HTTPStatus.NO_CONTENT
        repo = event.repository
        try:
            self.client.request_reviewers(repo, pr.number, team_reviewers=[TRIAGE_TEAM])
        except GitHubError as e:
            self.log.warning("Failed to request triage review on %s#%s: %s", repo.full_name, pr.number, e)
        try:
            self.client.create_issue_comment(repo, pr.number, TRIAGE_MENTION)
        except GitHubError as e:
            self.log.warning("Failed to ping triage on %s#%s: %s", repo.full_name, pr.number, e)
        return HTTPStatus.NO_CONTENT
