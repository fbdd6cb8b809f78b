"""Commands and housekeeping for the mason repository."""

from botman.mason.commands import Fixup, parse_mason_command
from botman.mason.surface import MasonSurface

__all__ = ["Fixup", "MasonSurface", "parse_mason_command"]
