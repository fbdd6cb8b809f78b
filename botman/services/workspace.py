"""Ephemeral git checkout of a pull request's head branch.

A Workspace is created per command and used as a context manager; leaving
the block removes the temporary directory whether the command succeeded or
not. All git calls that may touch a remote carry the bot's credentials as an
http.extraheader injected through GIT_CONFIG_* environment variables, so the
token never shows up in a remote URL, argv or .git/config.
"""

import base64
import logging
import tempfile
from http import HTTPStatus
from pathlib import Path
from typing import Sequence

from botman.actions.context import EventContext
from botman.actions.errors import ActionError
from botman.adapters.github import GitHubClient, GitHubError
from botman.config import AppConfig
from botman.models import Reaction, Ref
from botman.services.process import ProcessError, run_process

LOG = logging.getLogger("botman.services.workspace")

GITHUB_EXTRAHEADER_KEY = "http.https://github.com/.extraheader"
UPSTREAM = "upstream"


def credential_env(pat: str) -> dict[str, str]:
    """Environment that makes git send the PAT as a basic-auth header."""
    token = base64.b64encode(f"x-access-token:{pat}".encode()).decode()
    return {
        "GIT_CONFIG_COUNT": "1",
        "GIT_CONFIG_KEY_0": GITHUB_EXTRAHEADER_KEY,
        "GIT_CONFIG_VALUE_0": f"AUTHORIZATION: basic {token}",
        "GIT_TERMINAL_PROMPT": "0",
    }


def acknowledge(context: EventContext, client: GitHubClient, log: logging.Logger | None = None) -> None:
    """React +1 to the trigger and hide it; reviews support neither."""
    logger = log or LOG
    trigger = context.get_trigger()
    if not trigger.reactable:
        logger.info("Trigger %s is a review; skipping reaction and minimize", trigger.id)
        return
    client.create_comment_reaction(context.get_repo(), trigger, Reaction.PLUS_ONE)
    client.minimize_comment(trigger)


class Workspace:
    """Temporary clone of head with base's repository added as upstream."""

    def __init__(
        self,
        head: Ref,
        base: Ref,
        pat: str,
        commit_name: str,
        commit_email: str,
        log: logging.Logger | None = None,
    ) -> None:
        self._head = head
        self._base = base
        self._log = log or LOG
        self._tempdir = tempfile.TemporaryDirectory(prefix="botman-")
        self.workdir = Path(self._tempdir.name)
        self._git_env = {
            **credential_env(pat),
            "GIT_AUTHOR_NAME": commit_name,
            "GIT_AUTHOR_EMAIL": commit_email,
            "GIT_COMMITTER_NAME": commit_name,
            "GIT_COMMITTER_EMAIL": commit_email,
        }

    @property
    def head(self) -> Ref:
        return self._head

    @property
    def base(self) -> Ref:
        return self._base

    @property
    def upstream_base(self) -> str:
        return f"{UPSTREAM}/{self._base.ref}"

    @classmethod
    def create(
        cls,
        context: EventContext,
        client: GitHubClient,
        config: AppConfig,
        log: logging.Logger | None = None,
    ) -> "Workspace":
        """Resolve the PR, acknowledge the trigger, clone and check out head.

        Raises:
            ActionError: 204 if the trigger has no pull request, 503 if the
                acknowledgement fails, 500 for anything else.
        """
        logger = log or LOG
        try:
            pr = context.get_pull_request()
        except GitHubError as e:
            raise ActionError(HTTPStatus.INTERNAL_SERVER_ERROR, f"Failed to fetch pull request: {e}") from e
        if pr is None:
            raise ActionError(
                HTTPStatus.NO_CONTENT,
                f"Umm... there's no pull request associated with {context!r}",
            )
        if pr.head.repo is None or pr.base.repo is None:
            raise ActionError(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                f"Pull request #{pr.number} has no head repository (was the fork deleted?)",
            )

        try:
            acknowledge(context, client, log=logger)
        except GitHubError as e:
            raise ActionError(HTTPStatus.SERVICE_UNAVAILABLE, f"Failed to acknowledge command: {e}") from e

        try:
            workspace = cls(
                head=pr.head,
                base=pr.base,
                pat=config.github_pat_resolved or "",
                commit_name=config.commit_name,
                commit_email=config.commit_email,
                log=logger,
            )
        except OSError as e:
            raise ActionError(HTTPStatus.INTERNAL_SERVER_ERROR, f"Failed to create workspace: {e}") from e

        try:
            workspace._clone()
            workspace._checkout_head()
        except ProcessError as e:
            workspace.close()
            raise ActionError(HTTPStatus.INTERNAL_SERVER_ERROR, str(e)) from e
        return workspace

    def __enter__(self) -> "Workspace":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Remove the temporary directory; safe to call more than once."""
        self._tempdir.cleanup()

    def __repr__(self) -> str:
        return (
            f"Workspace(head={self._head.repo.full_name}:{self._head.ref}@{self._head.sha[:7]}, "
            f"base={self._base.repo.full_name}:{self._base.ref})"
        )

    def _git(self, args: Sequence[str]) -> bytes:
        return run_process("git", args, cwd=self.workdir, env=self._git_env, log=self._log)

    def _clone(self) -> None:
        self._log.info("Cloning %s", self._head.repo.full_name)
        self._git(["clone", "-c", "checkout.defaultRemote=origin", "--", self._head.repo.git_url, "."])
        self._git(["remote", "add", UPSTREAM, self._base.repo.git_url])
        self._git(["fetch", UPSTREAM])

    def _checkout_head(self) -> None:
        self._log.info("Checking out %s", self._head.ref)
        self._git(["checkout", self._head.ref])

    def merge_with_base(self) -> None:
        """Merge upstream's base branch, preferring head's side on conflicts."""
        self._log.info("Merging with %s", self.upstream_base)
        self._git(["fetch", UPSTREAM, self._base.ref])
        self._git(
            [
                "merge",
                "--no-edit",
                "-X",
                "ours",
                "-m",
                f"merge {self.upstream_base}",
                self.upstream_base,
            ]
        )

    def get_changed_files(self) -> set[Path]:
        """Paths (relative to the workdir) that differ from upstream's base."""
        output = self._git(["-c", "core.quotePath=false", "diff", "--name-only", "-z", self.upstream_base])
        names = output.decode("utf-8", errors="surrogateescape").split("\0")
        return {Path(name) for name in names if name}

    def commit(self, message: str) -> None:
        """Stage everything and commit; fails if there is nothing to commit."""
        self._log.info("Committing changes: %s", message)
        self._git(["add", "-A"])
        self._git(["commit", "-m", message])

    def push(self) -> None:
        self._log.info("Pushing to %s:%s", self._head.repo.full_name, self._head.ref)
        self._git(["push", "origin", f"HEAD:{self._head.ref}"])

    def spawn(self, command: str, args: Sequence[str]) -> bytes:
        """Run a tool in the workdir (no credentials in its environment)."""
        return run_process(command, args, cwd=self.workdir, log=self._log)

    def spawn_with_stdin(self, command: str, args: Sequence[str], stdin: bytes) -> bytes:
        return run_process(command, args, cwd=self.workdir, stdin=stdin, log=self._log)
