"""Error responses for route lookup failures.

Maps HTTPError exceptions raised by the route table to JSON-encoded
Response objects.
"""

import logging

from lumen.errors import HTTPError
from lumen.http.request import Request
from lumen.http.response import Response, Serializer, json_response


def handle_http_error(
    exc: HTTPError,
    request: Request,
    serialize: Serializer,
    logger: logging.Logger,
) -> Response:
    """Map an HTTPError to a Response whose body is the encoded detail.

    Raises ``ResponseEncodingError`` if the detail cannot be serialized.
    """
    logger.debug(
        "%d %s %s: %s",
        exc.status,
        request.method,
        request.path,
        exc.detail,
        extra={"request_id": request.request_id, "status": exc.status},
    )
    return json_response(exc.detail, exc.status, serialize)
