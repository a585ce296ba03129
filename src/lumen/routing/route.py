"""Route definition, its chainable constraint setters, and RouteMatch."""

from __future__ import annotations

from dataclasses import dataclass

from lumen._internal.types import Handler
from lumen.http.request import Request
from lumen.routing.matcher import WILDCARD, satisfies


def parse_pairs(*pairs: str) -> dict[str, str]:
    """Convert a flat ``key, value, key, value, ...`` list into a dict.

    An odd trailing key gets the ``WILDCARD`` value::

        parse_pairs("X-Key", "abc", "X-Trace") -> {"X-Key": "abc", "X-Trace": "*"}
    """
    out: dict[str, str] = {}
    for i in range(0, len(pairs), 2):
        key = pairs[i]
        out[key] = pairs[i + 1] if i + 1 < len(pairs) else WILDCARD
    return out


class Route:
    """A registered route.

    Returned from registration so constraints can be chained during setup::

        router.handler("POST", create).with_headers("X-Key", "abc").with_queries("draft")
    """

    __slots__ = ("handler", "headers", "method", "queries")

    def __init__(self, method: str, handler: Handler) -> None:
        self.method = method
        self.handler = handler
        self.headers: dict[str, str] = {}
        self.queries: dict[str, str] = {}

    def __repr__(self) -> str:
        name = getattr(self.handler, "__qualname__", repr(self.handler))
        return (
            f"Route({self.method!r}, {name}, headers={self.headers!r}, "
            f"queries={self.queries!r})"
        )

    def with_headers(self, *pairs: str) -> Route:
        """Require headers on matching requests. Replaces earlier header constraints.

        Use ``"*"`` (or leave the last key unpaired) to require presence only.
        """
        self.headers = parse_pairs(*pairs)
        return self

    def with_queries(self, *pairs: str) -> Route:
        """Require query parameters on matching requests. Replaces earlier query constraints.

        Use ``"*"`` (or leave the last key unpaired) to require presence only.
        """
        self.queries = parse_pairs(*pairs)
        return self

    def accepts(self, request: Request) -> bool:
        """True if the request meets both header and query constraints."""
        return satisfies(self.headers, request.headers) and satisfies(
            self.queries, request.query
        )


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route lookup."""

    route: Route

    @property
    def handler(self) -> Handler:
        return self.route.handler
