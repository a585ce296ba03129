"""Ordered middleware execution with short-circuit on status."""

from lumen.errors import ConfigurationError
from lumen.http.request import Request
from lumen.http.writer import ResponseWriter
from lumen.middleware.protocol import Middleware


class MiddlewareChain:
    """Middleware in registration order, run before every route handler."""

    __slots__ = ("_middleware",)

    def __init__(self) -> None:
        self._middleware: list[Middleware] = []

    def __len__(self) -> int:
        return len(self._middleware)

    def add(self, middleware: Middleware) -> None:
        """Append a middleware to the chain."""
        if not callable(middleware):
            msg = f"Middleware must be callable, got {middleware!r}."
            raise ConfigurationError(msg)
        self._middleware.append(middleware)

    def run(self, writer: ResponseWriter, request: Request) -> bool:
        """Run each middleware in order.

        Returns True as soon as one sets a status (the pipeline is
        short-circuited), False if all ran and the status is still unset.
        """
        for mw in self._middleware:
            mw(writer, request)
            if writer.status != 0:
                return True
        return False
