"""Commands understood on the mason-registry endpoint."""

from typing import Union

from pydantic import BaseModel, ConfigDict

from botman.actions.commands import Apply, MergeBase
from botman.actions.errors import ActionParseError
from botman.actions.parser import RawCommand


class RegistryFixup(BaseModel):
    """/fixup: normalize file extensions and formatting of changed package files."""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "/fixup"


RegistryCommand = Union[RegistryFixup, Apply, MergeBase]


def parse_registry_command(raw: RawCommand) -> RegistryCommand:
    if raw.name == "fixup":
        return RegistryFixup()
    if raw.name == "apply":
        return Apply.parse(raw)
    if raw.name == "merge-base":
        return MergeBase()
    raise ActionParseError(f"{raw.name} is not a valid mason-registry command.")
