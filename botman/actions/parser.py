"""Comment command grammar: "@<user> /<command> [arguments]".

Parsing is strict: anything that is not exactly a mention of an allowed user
followed by a slash command fails with ActionParseError. Authorization is a
separate step that checks the author of the triggering comment, not the
mentioned user.
"""

import re
from typing import Any, Callable, Collection

from pydantic import BaseModel, ConfigDict

from botman.actions.context import EventContext
from botman.actions.errors import ActionParseError, NotAllowedError

MENTION_SIGIL = "@"
COMMAND_SIGIL = "/"

_COMMAND_RE = re.compile(r"(\S+)(?:\s+(.*))?", re.DOTALL)


class Mention(BaseModel):
    """Login mentioned at the start of a command (the actionee)."""

    model_config = ConfigDict(frozen=True)

    login: str

    @classmethod
    def parse(cls, text: str, allowed: Collection[str]) -> "Mention":
        if not text.startswith(MENTION_SIGIL) or len(text) == 1:
            raise ActionParseError(f"{text} is not a valid mention.")
        login = text[1:]
        if login not in allowed:
            raise NotAllowedError(f"{login} is not an allowed user.")
        return cls(login=login)

    def __str__(self) -> str:
        return f"{MENTION_SIGIL}{self.login}"


class AuthorizedUser(BaseModel):
    """Author of the triggering comment, verified against the allow-list."""

    model_config = ConfigDict(frozen=True)

    login: str

    @classmethod
    def parse(cls, login: str, allowed: Collection[str]) -> "AuthorizedUser":
        if login not in allowed:
            raise NotAllowedError(f"{login} is not an allowed user.")
        return cls(login=login)


class RawCommand(BaseModel):
    """Command name and verbatim argument text, before surface-specific parsing."""

    model_config = ConfigDict(frozen=True)

    name: str
    arguments: str | None = None

    @classmethod
    def parse(cls, text: str) -> "RawCommand":
        if not text.startswith(COMMAND_SIGIL):
            raise ActionParseError(f"{text} is not a valid command.")
        match = _COMMAND_RE.fullmatch(text[1:])
        if match is None:
            raise ActionParseError(f"{text} is not a valid command.")
        return cls(name=match.group(1), arguments=match.group(2))

    def __str__(self) -> str:
        return f"{COMMAND_SIGIL}{self.name}"


class Action(BaseModel):
    """Parsed "@mention /command" pair; command is a surface-specific variant."""

    model_config = ConfigDict(frozen=True)

    actionee: Mention
    command: Any


class AuthorizedAction(BaseModel):
    """Action whose triggering author passed the allow-list.

    The only way to obtain one is authorize(); command handlers accept
    nothing else.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    action: Action
    context: EventContext
    authorized_by: AuthorizedUser


def parse_action(
    body: str,
    parse_command: Callable[[RawCommand], Any],
    mentionable: Collection[str],
) -> Action:
    """Split body on the first space and parse mention and command halves.

    Raises:
        ActionParseError: On any grammar or allow-list failure, or an
            unknown command name for the surface.
    """
    mention, sep, command = body.partition(" ")
    if not sep:
        raise ActionParseError(f"{body} is not valid action syntax.")
    actionee = Mention.parse(mention, mentionable)
    raw = RawCommand.parse(command)
    return Action(actionee=actionee, command=parse_command(raw))


def authorize(
    context: EventContext,
    parse_command: Callable[[RawCommand], Any],
    authorized_users: Collection[str],
    mentionable: Collection[str],
) -> AuthorizedAction:
    """Build an AuthorizedAction from an event context.

    The triggering comment's author must be in authorized_users; the
    mentioned login only has to be in mentionable.
    """
    trigger = context.get_trigger()
    authorized_by = AuthorizedUser.parse(trigger.user.login, authorized_users)
    if not trigger.body:
        raise ActionParseError("Body is empty.")
    action = parse_action(trigger.body, parse_command, mentionable)
    return AuthorizedAction(action=action, context=context, authorized_by=authorized_by)
