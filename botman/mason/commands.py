"""Commands understood on the mason endpoint."""

from typing import Union

from pydantic import BaseModel, ConfigDict

from botman.actions.commands import Apply, MergeBase
from botman.actions.errors import ActionParseError
from botman.actions.parser import RawCommand


class Fixup(BaseModel):
    """/fixup: merge base, regenerate, reformat, commit and push."""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "/fixup"


MasonCommand = Union[Fixup, Apply, MergeBase]


def parse_mason_command(raw: RawCommand) -> MasonCommand:
    if raw.name == "fixup":
        return Fixup()
    if raw.name == "apply":
        return Apply.parse(raw)
    if raw.name == "merge-base":
        return MergeBase()
    raise ActionParseError(f"{raw.name} is not a valid mason command.")
