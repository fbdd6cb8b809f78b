"""Command variants accepted by every surface."""

from pydantic import BaseModel, ConfigDict

from botman.actions.errors import ActionParseError
from botman.actions.parser import RawCommand
from botman.actions.patch import GitApplyPatch


class Apply(BaseModel):
    """/apply followed by a ```diff block."""

    model_config = ConfigDict(frozen=True)

    patch: GitApplyPatch

    @classmethod
    def parse(cls, raw: RawCommand) -> "Apply":
        if raw.arguments is None:
            raise ActionParseError(f"{raw.name} is missing arguments.")
        return cls(patch=GitApplyPatch.parse(raw.arguments))

    def __str__(self) -> str:
        return "/apply"


class MergeBase(BaseModel):
    """/merge-base"""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "/merge-base"
