"""Lumen router — the application object.

Mutable during setup (routes, middleware, recovery, logging).
Read-only once it starts serving: ``handle()`` and ``__call__()`` only
read the route table and middleware chain.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any, TextIO

from lumen._internal.types import Handler
from lumen.config import RouterConfig
from lumen.errors import ConfigurationError
from lumen.http.request import Request
from lumen.http.response import Response, Serializer
from lumen.log import create_logger, set_output
from lumen.middleware.chain import MiddlewareChain
from lumen.middleware.protocol import Middleware
from lumen.routing.route import Route
from lumen.routing.table import RouteTable
from lumen.server.handler import handle_request
from lumen.server.recovery import RecoverFunc


class Router:
    """Routes API Gateway proxy events to registered handlers.

    Usage::

        router = Router()

        def hello(w: ResponseWriter, r: Request) -> None:
            w.write_header(200)
            w.write("hello")

        router.handler("GET", hello)

        # Lambda entry point
        def lambda_handler(event, context):
            return router(event, context)

    Thread safety:
        Setup is single-threaded. After the first request, concurrent
        ``handle()`` calls share the route table and middleware read-only;
        each call has its own Request and ResponseWriter. Registering
        routes while requests are in flight is not supported.
    """

    __slots__ = ("_chain", "_logger", "_recovery", "_serialize", "_table", "config")

    def __init__(
        self,
        config: RouterConfig | None = None,
        *,
        logger: logging.Logger | None = None,
        serialize: Serializer | None = None,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._table = RouteTable()
        self._chain = MiddlewareChain()
        self._recovery: RecoverFunc | None = None
        self._logger: logging.Logger = logger or create_logger(self.config)
        self._serialize: Serializer = serialize or json.dumps

    # -- Route registration --

    def handler(self, method: str, fn: Handler) -> Route:
        """Register *fn* for *method* and return the route for chaining::

            router.handler("POST", create).with_headers("X-Key", "abc")
        """
        route = self._table.register(method, fn)
        self._logger.info("registered new handler", extra={"method": method})
        return route

    def route(
        self,
        method: str,
        *,
        headers: tuple[str, ...] = (),
        queries: tuple[str, ...] = (),
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            method: HTTP method, compared exactly (``"GET"``, not ``"get"``).
            headers: Header constraint pairs, as for ``Route.with_headers``.
            queries: Query constraint pairs, as for ``Route.with_queries``.
        """

        def decorator(func: Handler) -> Handler:
            route = self.handler(method, func)
            if headers:
                route.with_headers(*headers)
            if queries:
                route.with_queries(*queries)
            return func

        return decorator

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in registration order."""
        return self._table.routes

    # -- Middleware --

    def middleware(self, fn: Middleware) -> Router:
        """Add a middleware to run before every route handler."""
        self._chain.add(fn)
        return self

    # -- Recovery --

    def recovery(self, fn: RecoverFunc) -> Router:
        """Set a custom recovery callback.

        Without one, failures in middleware or handlers are still
        recovered: they are logged and the request is finalized from
        whatever the handler wrote.
        """
        if not callable(fn):
            msg = f"Recovery callback must be callable, got {fn!r}."
            raise ConfigurationError(msg)
        self._recovery = fn
        return self

    # -- Logging --

    def logging(self, stream: TextIO, formatter: logging.Formatter | None = None) -> Router:
        """Send the router's logs to *stream*.

        *formatter* defaults to ``JSONFormatter``. Anything Lambda writes
        to stdout or stderr ends up in CloudWatch.
        """
        set_output(self._logger, stream, formatter)
        return self

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    # -- Dispatch --

    def handle(self, request: Request) -> Response:
        """Dispatch one request and return its response.

        - No route for the method: 405 with a JSON error body.
        - Routes for the method but none accept the headers/query: 406.
        - A failure in middleware or the handler is recovered and the
          response built from whatever was written (500 if no status).

        Raises ``ResponseEncodingError`` only if a 405/406 body cannot be
        serialized.
        """
        return handle_request(
            request,
            table=self._table,
            chain=self._chain,
            recovery=self._recovery,
            logger=self._logger,
            serialize=self._serialize,
            stack_limit=self.config.stack_limit,
        )

    def __call__(self, event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
        """AWS Lambda entry point for API Gateway proxy events."""
        return self.handle(Request.from_event(event)).to_event()
