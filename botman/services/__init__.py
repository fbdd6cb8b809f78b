"""Process runner and git workspace."""

from botman.services.process import ProcessError, ProcessSpawnError, run_process
from botman.services.workspace import Workspace

__all__ = ["ProcessError", "ProcessSpawnError", "Workspace", "run_process"]
