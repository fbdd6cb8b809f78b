"""Run external commands: one process per call, optional stdin, captured output."""

import logging
import os
import subprocess
from pathlib import Path
from typing import Mapping, Sequence

LOG = logging.getLogger("botman.services.process")


class ProcessError(Exception):
    """Raised when a command exits non-zero."""

    def __init__(
        self,
        command: str,
        arguments: Sequence[str],
        exit_status: int | None,
        stderr: str,
        message: str | None = None,
    ) -> None:
        super().__init__(message or f"{command} failed ({exit_status}): {stderr}")
        self.command = command
        self.arguments = list(arguments)
        self.exit_status = exit_status
        self.stderr = stderr


class ProcessSpawnError(ProcessError):
    """Raised when a command cannot be started at all (missing binary, permission)."""

    def __init__(self, command: str, arguments: Sequence[str], reason: str) -> None:
        super().__init__(command, arguments, None, reason, message=f"{command} could not be started: {reason}")


def run_process(
    command: str,
    args: Sequence[str],
    cwd: Path,
    stdin: bytes | None = None,
    env: Mapping[str, str] | None = None,
    log: logging.Logger | None = None,
) -> bytes:
    """Run command with args in cwd and return its captured stdout.

    When stdin is given it is written fully and the pipe closed before
    waiting, so tools that read until end-of-input (git apply -) terminate.
    env entries are overlaid on the current environment. There is no
    timeout; a hung process stalls only the calling thread.

    Raises:
        ProcessSpawnError: If the process could not be started.
        ProcessError: If the process exits non-zero.
    """
    logger = log or LOG
    cmd = [command, *args]
    process_env = {**os.environ, **env} if env else None
    logger.debug("Running %s in %s", cmd, cwd)
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            input=stdin,
            stdin=None if stdin is not None else subprocess.DEVNULL,
            capture_output=True,
            env=process_env,
            check=False,
        )
    except OSError as e:
        logger.warning("%s %s could not be started: %s", command, list(args), e)
        raise ProcessSpawnError(command, args, str(e)) from e
    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        logger.warning("%s %s failed: %s", command, list(args), stderr)
        raise ProcessError(command, args, result.returncode, stderr)
    return result.stdout
