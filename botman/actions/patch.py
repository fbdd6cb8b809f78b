"""Unified diff carried in a ```diff fenced block of a command's arguments."""

from pydantic import BaseModel, ConfigDict

from botman.actions.errors import ActionParseError

DIFF_FENCE = "```diff"
CLOSING_FENCE = "```"


class GitApplyPatch(BaseModel):
    """Patch text ready to be piped into git apply."""

    model_config = ConfigDict(frozen=True)

    patch: str

    @classmethod
    def parse(cls, text: str) -> "GitApplyPatch":
        """Extract the body of the first ```diff block.

        Leading whitespace and every carriage return are dropped. Lines after
        the header are kept (with their newlines) up to a bare ``` line; if
        the fence is never closed, everything after the header is the patch.

        Raises:
            ActionParseError: If there is no text or the first line is not a
                ```diff header.
        """
        massaged = text.lstrip().replace("\r", "")
        parts = massaged.split("\n")
        lines = [part + "\n" for part in parts[:-1]]
        if parts[-1]:
            lines.append(parts[-1])
        if not lines:
            raise ActionParseError("No header.")
        if not lines[0].startswith(DIFF_FENCE):
            raise ActionParseError("Not a diff.")
        patch = []
        for line in lines[1:]:
            if line.rstrip("\n") == CLOSING_FENCE:
                break
            patch.append(line)
        return cls(patch="".join(patch))
