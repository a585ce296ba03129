"""Immutable HTTP response.

Produced exactly once per dispatch by ``ResponseWriter.finalize()`` or by
the error path, then handed to the caller.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from lumen.errors import ResponseEncodingError

JSON_CONTENT_TYPE = "application/json"

# Serializer port: turns an arbitrary payload into the encoded body.
# Bytes results (orjson and friends) are decoded as UTF-8.
type Serializer = Callable[[Any], str | bytes]


@dataclass(frozen=True, slots=True)
class Response:
    """A finished HTTP response."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str = ""

    def to_event(self) -> dict[str, Any]:
        """Render as an API Gateway proxy integration response."""
        return {
            "statusCode": self.status,
            "headers": dict(self.headers),
            "body": self.body,
            "isBase64Encoded": False,
        }


def json_response(data: Any, status: int, serialize: Serializer) -> Response:
    """Create a response with a serialized body and ``Content-Type: application/json``.

    Raises ``ResponseEncodingError`` if *serialize* fails or returns bytes
    that are not valid UTF-8.
    """
    try:
        body = serialize(data)
        if isinstance(body, bytes):
            body = body.decode("utf-8")
    except Exception as exc:
        msg = f"failed to encode response body, {exc}"
        raise ResponseEncodingError(msg) from exc
    return Response(status=status, headers={"Content-Type": JSON_CONTENT_TYPE}, body=body)
