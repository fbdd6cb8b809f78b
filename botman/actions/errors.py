"""Errors raised while parsing and executing comment commands."""

from http import HTTPStatus


class ActionParseError(Exception):
    """Comment text is not a valid action; never reported back to GitHub."""

    pass


class NotAllowedError(ActionParseError):
    """Mentioned or triggering user is not on the allow-list."""

    pass


class ActionError(Exception):
    """A command handler failed; status is returned to the webhook caller."""

    def __init__(self, status: HTTPStatus, message: str) -> None:
        super().__init__(message)
        self.status = status
