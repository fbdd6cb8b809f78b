"""Tests for GitApplyPatch extraction from ```diff blocks."""

import pytest

from botman.actions.errors import ActionParseError
from botman.actions.patch import GitApplyPatch

DIFF = "--- a/README.md\n+++ b/README.md\n@@ -1 +1 @@\n-old\n+new\n"


def test_extracts_interior_lines() -> None:
    assert GitApplyPatch.parse(f"```diff\n{DIFF}```\n").patch == DIFF


def test_leading_whitespace_and_carriage_returns_dropped() -> None:
    text = "\r\n  ```diff\r\n" + DIFF.replace("\n", "\r\n") + "```\r\n"
    assert GitApplyPatch.parse(text).patch == DIFF


def test_closing_fence_without_trailing_newline() -> None:
    assert GitApplyPatch.parse(f"```diff\n{DIFF}```").patch == DIFF


def test_text_after_closing_fence_ignored() -> None:
    assert GitApplyPatch.parse(f"```diff\n{DIFF}```\nthanks!\n").patch == DIFF


def test_unterminated_fence_returns_accumulated_lines() -> None:
    assert GitApplyPatch.parse(f"```diff\n{DIFF}").patch == DIFF


def test_header_may_carry_trailing_text() -> None:
    assert GitApplyPatch.parse(f"```diff title\n{DIFF}```").patch == DIFF


def test_fence_with_indentation_is_patch_content() -> None:
    assert GitApplyPatch.parse("```diff\n ```\n```").patch == " ```\n"


def test_missing_header_fails() -> None:
    with pytest.raises(ActionParseError, match="Not a diff."):
        GitApplyPatch.parse(f"```\n{DIFF}```")


def test_prose_fails() -> None:
    with pytest.raises(ActionParseError, match="Not a diff."):
        GitApplyPatch.parse("please fix the readme")


def test_empty_text_fails() -> None:
    with pytest.raises(ActionParseError, match="No header."):
        GitApplyPatch.parse("   \n\t")
