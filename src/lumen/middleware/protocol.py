"""Middleware protocol.

A middleware is any callable matching::

    def my_mw(writer: ResponseWriter, request: Request) -> None: ...

No base class required. The router checks the shape, not the lineage.

Middleware runs before the route handler and shares its writer. Setting
a status (``writer.write_header(...)``) ends the pipeline: later
middleware and the route handler are skipped.
"""

from typing import Any, Protocol

from lumen.http.request import Request
from lumen.http.writer import ResponseWriter


class Middleware(Protocol):
    """Protocol for lumen middleware.

    Accepts both functions and callable objects::

        # Function middleware
        def api_key(writer: ResponseWriter, request: Request) -> None:
            if request.header("X-Api-Key") != KEY:
                writer.write_header(401)

        # Class middleware
        class Tagger:
            def __call__(self, writer: ResponseWriter, request: Request) -> None:
                writer.headers.set("X-Served-By", "lumen")
    """

    def __call__(self, writer: ResponseWriter, request: Request) -> Any: ...
