"""Per-request response accumulator.

Handlers and middleware never build a Response themselves. They write
into a ``ResponseWriter`` the way a classic HTTP handler writes to its
connection, and the dispatcher finalizes it once the pipeline is done.
"""

from lumen.http.headers import Headers
from lumen.http.response import Response

FALLBACK_STATUS = 500
FALLBACK_BODY = "failed to obtain response"


class ResponseWriter:
    """Mutable status, headers and body for one in-flight request.

    ``status`` 0 means "not set yet". Middleware short-circuits the
    pipeline by setting it.
    """

    __slots__ = ("_body", "_headers", "status")

    def __init__(self) -> None:
        self.status: int = 0
        self._headers = Headers()
        self._body = bytearray()

    @property
    def headers(self) -> Headers:
        """The mutable response headers."""
        return self._headers

    def write(self, data: bytes | str) -> int:
        """Append *data* to the body and return the number of bytes written."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._body += data
        return len(data)

    def write_header(self, code: int) -> None:
        """Set the status code. The last call wins."""
        self.status = code

    def finalize(self) -> Response:
        """Freeze the accumulated state into a Response.

        A handler that never set a status gets a fixed 500, whatever it
        wrote to the body.
        """
        if self.status == 0:
            return Response(status=FALLBACK_STATUS, headers={}, body=FALLBACK_BODY)
        return Response(
            status=self.status,
            headers=dict(self._headers),
            body=self._body.decode("utf-8", errors="replace"),
        )
