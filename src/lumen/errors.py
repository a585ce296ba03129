"""Lumen exception hierarchy.

Shared across the route table, router, recovery and middleware so every
module raises and catches the same types.
"""

from dataclasses import dataclass
from typing import Any


class LumenError(Exception):
    """Base for all lumen-specific errors."""


class ConfigurationError(LumenError):
    """Raised when router configuration is invalid.

    Surfaces at registration time, never while serving.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(LumenError):
    """A route lookup failure that maps directly to an HTTP status code.

    Raised by the route table. The dispatcher catches these and turns
    ``detail`` into a JSON-encoded error body.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — no registered route uses the request's method."""

    def __init__(self, detail: str = "not allowed") -> None:
        super().__init__(status=405, detail=detail)


class NotAcceptable(HTTPError):  # noqa: N818
    """406 — routes exist for the method but none accept the headers/query.

    Only the terminal outcome is reported. Which candidate failed, and on
    which constraint, is not recorded.
    """

    def __init__(self, detail: str = "not acceptable") -> None:
        super().__init__(status=406, detail=detail)


class ResponseEncodingError(LumenError):
    """An error response body could not be serialized.

    The only failure ``Router.handle()`` lets escape to its caller.
    """


class Panic(LumenError):  # noqa: N818
    """Abort a handler with an arbitrary payload.

    Handlers that want to bail out with something other than an exception
    (a message, a dict, a number) raise ``Panic(value)``. The recovery
    boundary unwraps the payload into a proper exception::

        raise Panic("database unavailable")
        raise Panic({"code": 17})
    """

    def __init__(self, value: Any) -> None:
        super().__init__(value)
        self.value = value


class RecoveredError(LumenError):
    """Normalized form of a non-exception ``Panic`` payload."""
