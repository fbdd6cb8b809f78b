"""Tests for the command grammar and authorization gate."""

from unittest.mock import Mock

import pytest

from botman.actions.context import EventContext
from botman.actions.errors import ActionParseError, NotAllowedError
from botman.actions.parser import (
    AuthorizedAction,
    AuthorizedUser,
    Mention,
    RawCommand,
    authorize,
    parse_action,
)
from botman.models import Comment, User

ALLOWED = frozenset({"williamboman", "williambotman"})


def _context(body: str | None, login: str = "williamboman") -> Mock:
    context = Mock(spec=EventContext)
    context.get_trigger.return_value = Comment(id=1, body=body, user=User(id=1, login=login))
    return context


class TestMention:
    def test_allowed_login(self) -> None:
        mention = Mention.parse("@williamboman", ALLOWED)
        assert mention.login == "williamboman"
        assert str(mention) == "@williamboman"

    @pytest.mark.parametrize("text", ["williamboman", "@", "", "#williamboman"])
    def test_invalid_mention(self, text: str) -> None:
        with pytest.raises(ActionParseError, match="is not a valid mention."):
            Mention.parse(text, ALLOWED)

    def test_unknown_login_not_allowed(self) -> None:
        with pytest.raises(NotAllowedError, match="someone is not an allowed user."):
            Mention.parse("@someone", ALLOWED)

    def test_match_is_exact(self) -> None:
        with pytest.raises(NotAllowedError):
            Mention.parse("@WilliamBoman", ALLOWED)


class TestRawCommand:
    def test_name_only(self) -> None:
        raw = RawCommand.parse("/fixup")
        assert raw.name == "fixup"
        assert raw.arguments is None
        assert str(raw) == "/fixup"

    def test_arguments_preserved_verbatim(self) -> None:
        raw = RawCommand.parse("/apply\n```diff\n-a\n+b\n```")
        assert raw.name == "apply"
        assert raw.arguments == "```diff\n-a\n+b\n```"

    def test_first_whitespace_run_separates(self) -> None:
        assert RawCommand.parse("/apply   a  b ").arguments == "a  b "

    @pytest.mark.parametrize("text", ["fixup", "/", "/ fixup", ""])
    def test_invalid_command(self, text: str) -> None:
        with pytest.raises(ActionParseError, match="is not a valid command."):
            RawCommand.parse(text)


class TestParseAction:
    def test_mention_and_command(self) -> None:
        action = parse_action("@williamboman /merge-base", lambda raw: raw.name, ALLOWED)
        assert action.actionee == Mention(login="williamboman")
        assert action.command == "merge-base"

    def test_tokens_round_trip(self) -> None:
        action = parse_action("@williambotman /fixup now", lambda raw: raw, ALLOWED)
        assert f"{action.actionee} {action.command}" == "@williambotman /fixup"

    def test_no_space_is_invalid_syntax(self) -> None:
        with pytest.raises(ActionParseError, match="is not valid action syntax."):
            parse_action("@williamboman/fixup", lambda raw: raw, ALLOWED)

    def test_command_conversion_failure_propagates(self) -> None:
        def reject(raw: RawCommand) -> None:
            raise ActionParseError(f"{raw.name} is not a valid mason command.")

        with pytest.raises(ActionParseError, match="deploy is not a valid mason command."):
            parse_action("@williamboman /deploy", reject, ALLOWED)


class TestAuthorize:
    def test_authorized_trigger_user(self) -> None:
        context = _context("@williambotman /fixup")
        authorized = authorize(context, lambda raw: raw.name, ["williamboman"], ALLOWED)
        assert isinstance(authorized, AuthorizedAction)
        assert authorized.authorized_by == AuthorizedUser(login="williamboman")
        assert authorized.action.command == "fixup"
        assert authorized.context is context

    def test_trigger_user_checked_not_mention(self) -> None:
        """Mentioning an allowed user does not authorize the comment's author."""
        context = _context("@williamboman /fixup", login="mallory")
        with pytest.raises(NotAllowedError, match="mallory is not an allowed user."):
            authorize(context, lambda raw: raw.name, ["williamboman"], ALLOWED)

    @pytest.mark.parametrize("body", [None, ""])
    def test_empty_body(self, body: str | None) -> None:
        with pytest.raises(ActionParseError, match="Body is empty."):
            authorize(_context(body), lambda raw: raw.name, ["williamboman"], ALLOWED)

    def test_parse_command_not_called_for_bad_mention(self) -> None:
        parse_command = Mock()
        with pytest.raises(ActionParseError):
            authorize(_context("hello /fixup"), parse_command, ["williamboman"], ALLOWED)
        parse_command.assert_not_called()
