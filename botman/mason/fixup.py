"""/fixup for the mason repository."""

import logging
from http import HTTPStatus
from typing import Sequence

from botman.actions.errors import ActionError
from botman.actions.parser import AuthorizedAction
from botman.adapters.github import GitHubClient
from botman.config import AppConfig
from botman.services.process import ProcessError
from botman.services.workspace import Workspace

LOG = logging.getLogger("botman.mason.fixup")


def _run_tool(workspace: Workspace, command: Sequence[str]) -> None:
    if not command:
        return
    workspace.spawn(command[0], list(command[1:]))


def restore_generated_paths(workspace: Workspace, paths: Sequence[str], log: logging.Logger | None = None) -> None:
    """Check paths out from upstream's base branch, ignoring failures."""
    logger = log or LOG
    for path in paths:
        try:
            workspace.spawn("git", ["checkout", workspace.upstream_base, "--", path])
        except ProcessError as e:
            logger.warning("Failed to restore %s from %s: %s", path, workspace.upstream_base, e)


def run_fixup(
    action: AuthorizedAction,
    client: GitHubClient,
    config: AppConfig,
    log: logging.Logger | None = None,
) -> str:
    """Merge base, run code generation and the formatter, commit and push.

    An empty commit is not an error; everything else is.
    """
    logger = log or LOG
    with Workspace.create(action.context, client, config, log=logger) as workspace:
        try:
            workspace.merge_with_base()
            logger.info("Generating code...")
            _run_tool(workspace, config.mason.generate_command)
            logger.info("Running formatter...")
            _run_tool(workspace, config.mason.format_command)
            restore_generated_paths(workspace, config.mason.restore_paths, log=logger)
            try:
                workspace.commit("fixup")
            except ProcessError as e:
                logger.info("Nothing to commit after fixup: %s", e)
            workspace.push()
        except ProcessError as e:
            raise ActionError(HTTPStatus.INTERNAL_SERVER_ERROR, str(e)) from e
        return f"Successfully ran mason fixup in {workspace!r}"
