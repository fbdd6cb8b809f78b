"""Commands and housekeeping for the mason-registry repository."""

from botman.registry.commands import RegistryFixup, parse_registry_command
from botman.registry.surface import RegistrySurface

__all__ = ["RegistryFixup", "RegistrySurface", "parse_registry_command"]
