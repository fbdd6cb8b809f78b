"""Command handlers shared by every surface: /apply and /merge-base."""

import logging
from http import HTTPStatus

from botman.actions.errors import ActionError
from botman.actions.parser import AuthorizedAction
from botman.actions.patch import GitApplyPatch
from botman.adapters.github import GitHubClient
from botman.config import AppConfig
from botman.services.process import ProcessError
from botman.services.workspace import Workspace

LOG = logging.getLogger("botman.actions.common")


def run_apply(
    action: AuthorizedAction,
    patch: GitApplyPatch,
    client: GitHubClient,
    config: AppConfig,
    log: logging.Logger | None = None,
) -> str:
    """Pipe patch into git apply, commit and push. Every step is fatal."""
    logger = log or LOG
    with Workspace.create(action.context, client, config, log=logger) as workspace:
        try:
            logger.info("Applying patch\n%s", patch.patch)
            workspace.spawn_with_stdin("git", ["apply", "--", "-"], patch.patch.encode("utf-8"))
            workspace.commit("apply diff")
            workspace.push()
        except ProcessError as e:
            raise ActionError(HTTPStatus.INTERNAL_SERVER_ERROR, str(e)) from e
        return f"Successfully ran apply in {workspace!r}"


def run_merge_base(
    action: AuthorizedAction,
    client: GitHubClient,
    config: AppConfig,
    log: logging.Logger | None = None,
) -> str:
    """Merge upstream's base branch into head and push."""
    logger = log or LOG
    with Workspace.create(action.context, client, config, log=logger) as workspace:
        try:
            workspace.merge_with_base()
            workspace.push()
        except ProcessError as e:
            raise ActionError(HTTPStatus.INTERNAL_SERVER_ERROR, str(e)) from e
        return f"Successfully ran merge-base in {workspace!r}"
