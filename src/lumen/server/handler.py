"""Request dispatch — one request in, one response out.

Resolves the route, runs middleware and the handler under the recovery
boundary against a fresh ResponseWriter, and finalizes the writer.
"""

import logging
import time

from lumen.errors import HTTPError
from lumen.http.request import Request
from lumen.http.response import Response, Serializer
from lumen.http.writer import ResponseWriter
from lumen.middleware.chain import MiddlewareChain
from lumen.routing.table import RouteTable
from lumen.server.errors import handle_http_error
from lumen.server.recovery import STACK_LIMIT, RecoverFunc, guard


def handle_request(
    request: Request,
    *,
    table: RouteTable,
    chain: MiddlewareChain,
    recovery: RecoverFunc | None,
    logger: logging.Logger,
    serialize: Serializer,
    stack_limit: int = STACK_LIMIT,
) -> Response:
    """Process a single request through the full pipeline.

    Lookup failures become JSON 405/406 responses. Failures inside
    middleware or the handler are recovered. The only exception that
    escapes is ``ResponseEncodingError`` from a 405/406 body.
    """
    start = time.monotonic()

    logger.info(
        "handling incoming request",
        extra={
            "method": request.method,
            "params": dict(request.query),
            "request_id": request.request_id,
        },
    )

    try:
        match = table.resolve(request)
    except HTTPError as exc:
        return handle_http_error(exc, request, serialize, logger)

    writer = ResponseWriter()

    def run() -> None:
        if chain.run(writer, request):
            return
        match.handler(writer, request)

    guard(request, recovery, run, logger=logger, stack_limit=stack_limit)

    response = writer.finalize()

    logger.info(
        "finished handling request",
        extra={
            "status": response.status,
            "duration": round((time.monotonic() - start) * 1000, 3),
            "request_id": request.request_id,
        },
    )

    return response
