"""Ordered route table with first-match-wins lookup.

Routes are registered during setup. Lookup filters by method, then
takes the first route, in registration order, whose header and query
constraints the request meets.
"""

from lumen._internal.types import Handler
from lumen.errors import ConfigurationError, MethodNotAllowed, NotAcceptable
from lumen.http.request import Request
from lumen.routing.route import Route, RouteMatch


class RouteTable:
    """Registration-ordered collection of routes.

    Usage::

        table = RouteTable()
        table.register("GET", list_items)
        table.register("POST", create_item).with_headers("X-Key", "abc")
        match = table.resolve(request)
    """

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: list[Route] = []

    def __len__(self) -> int:
        return len(self._routes)

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in registration order."""
        return tuple(self._routes)

    def register(self, method: str, handler: Handler) -> Route:
        """Append a route with no constraints and return it for chaining."""
        if not method:
            msg = "Route method must be a non-empty string."
            raise ConfigurationError(msg)
        if not callable(handler):
            msg = f"Route handler for {method} must be callable, got {handler!r}."
            raise ConfigurationError(msg)

        route = Route(method, handler)
        self._routes.append(route)
        return route

    def resolve(self, request: Request) -> RouteMatch:
        """Find the route for *request*.

        Returns a ``RouteMatch`` on success.
        Raises ``MethodNotAllowed`` if no route uses the request's method.
        Raises ``NotAcceptable`` if routes use the method but none accept
        the request's headers and query parameters.
        """
        candidates = [route for route in self._routes if route.method == request.method]
        if not candidates:
            raise MethodNotAllowed()

        for route in candidates:
            if route.accepts(request):
                return RouteMatch(route=route)

        raise NotAcceptable()
