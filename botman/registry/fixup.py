"""/fixup for the mason-registry repository.

Only files the pull request touched are considered. Legacy .yml package
files are renamed to .yaml (one commit each), then every changed file gets
the styling transform (one commit per file, empty commits ignored).
"""

import logging
from http import HTTPStatus
from pathlib import Path
from typing import Iterable, List, Sequence, Set

from botman.actions.errors import ActionError
from botman.actions.parser import AuthorizedAction
from botman.adapters.github import GitHubClient
from botman.config import AppConfig, RegistryConfig
from botman.services.process import ProcessError
from botman.services.workspace import Workspace

LOG = logging.getLogger("botman.registry.fixup")

DOCUMENT_START = "---"
SECTION_KEYS = ("source:", "bin:", "share:", "opt:")


def apply_styling_fixes(lines: Sequence[str]) -> List[str]:
    """Ensure a leading '---' and a blank line before each top-level section.

    Lines carry no newline characters. Applying the transform to its own
    output changes nothing.
    """
    fixed = list(lines)
    if not fixed or fixed[0] != DOCUMENT_START:
        fixed.insert(0, DOCUMENT_START)
    result: List[str] = []
    for line in fixed:
        if line in SECTION_KEYS and result and result[-1] != "":
            result.append("")
        result.append(line)
    return result


def walk_files(directory: Path) -> List[Path]:
    """All regular files below directory, depth first in name order."""
    if not directory.is_dir():
        return []
    return sorted(path for path in directory.rglob("*") if path.is_file())


def _package_name(path: Path, packages_dir: Path) -> str:
    return path.parent.relative_to(packages_dir).as_posix()


def rename_legacy_extensions(
    workspace: Workspace,
    packages_dir: Path,
    changed_files: Set[Path],
    registry: RegistryConfig,
    log: logging.Logger | None = None,
) -> Set[Path]:
    """Rename changed old-extension files and commit each move. Returns the new paths."""
    logger = log or LOG
    renamed = set()
    for path in walk_files(packages_dir):
        if path not in changed_files or path.suffix != registry.old_extension:
            continue
        new_path = path.with_suffix(registry.new_extension)
        logger.info("Renaming %s to %s", path.name, new_path.name)
        path.rename(new_path)
        workspace.commit(f"fix({_package_name(path, packages_dir)}): move {path.name} to {new_path.name}")
        renamed.add(new_path)
    return renamed


def fix_styling(
    workspace: Workspace,
    packages_dir: Path,
    changed_files: Iterable[Path],
    log: logging.Logger | None = None,
) -> None:
    """Rewrite each changed package file with the styling transform and commit it."""
    logger = log or LOG
    changed = set(changed_files)
    for path in walk_files(packages_dir):
        if path not in changed:
            continue
        try:
            current = path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            logger.warning("Skipping %s: not UTF-8", path)
            continue
        styled = "\n".join(apply_styling_fixes(current.splitlines())) + "\n"
        if styled == current:
            continue
        path.write_text(styled, encoding="utf-8")
        try:
            workspace.commit(f"style({_package_name(path, packages_dir)}): fix formatting")
        except ProcessError as e:
            logger.warning("Failed to commit styling fixes for %s: %s", path, e)


def run_registry_fixup(
    action: AuthorizedAction,
    client: GitHubClient,
    config: AppConfig,
    log: logging.Logger | None = None,
) -> str:
    logger = log or LOG
    with Workspace.create(action.context, client, config, log=logger) as workspace:
        packages_dir = workspace.workdir / config.registry.packages_dir
        try:
            changed = {workspace.workdir / path for path in workspace.get_changed_files()}
            changed |= rename_legacy_extensions(workspace, packages_dir, changed, config.registry, log=logger)
            fix_styling(workspace, packages_dir, changed, log=logger)
            workspace.push()
        except (ProcessError, OSError) as e:
            raise ActionError(HTTPStatus.INTERNAL_SERVER_ERROR, str(e)) from e
        return f"Successfully ran mason-registry fixup in {workspace!r}"
