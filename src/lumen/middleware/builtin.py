"""Built-in middleware: CORS and required headers.

Both follow the writer protocol: they add response headers, and end the
pipeline by setting a status when the request should not reach a handler.
"""

import json
from dataclasses import dataclass

from lumen.http.headers import Headers
from lumen.http.request import Request
from lumen.http.response import JSON_CONTENT_TYPE
from lumen.http.writer import ResponseWriter


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS middleware configuration.

    All fields have secure defaults (nothing is allowed).
    Override what you need::

        CORSConfig(
            allow_origins=("https://example.com",),
            allow_methods=("GET", "POST"),
        )
    """

    allow_origins: tuple[str, ...] = ()
    allow_methods: tuple[str, ...] = ("GET", "HEAD", "OPTIONS")
    allow_headers: tuple[str, ...] = ()
    expose_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: int = 600  # 10 minutes


class CORSMiddleware:
    """Standards-compliant CORS middleware.

    Handles:
    - Preflight ``OPTIONS`` requests (ends the pipeline with 204 and CORS headers)
    - Simple and actual requests (adds CORS headers, handler still runs)
    - Credential support (``Access-Control-Allow-Credentials``)
    - Wildcard origins (``"*"``) when credentials are disabled

    Register an ``OPTIONS`` route (any handler) so preflights get past
    method lookup; the middleware answers before the handler runs.

    Usage::

        router.middleware(CORSMiddleware(CORSConfig(
            allow_origins=("https://example.com",),
            allow_methods=("GET", "POST", "PUT"),
            allow_headers=("Content-Type", "Authorization"),
        )))
    """

    __slots__ = ("config",)

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()

    def _is_allowed_origin(self, origin: str) -> bool:
        """Check if the origin is in the allow list."""
        if "*" in self.config.allow_origins:
            return True
        return origin in self.config.allow_origins

    def _add_cors_headers(self, headers: Headers, origin: str) -> None:
        cfg = self.config

        if "*" in cfg.allow_origins and not cfg.allow_credentials:
            headers.set("Access-Control-Allow-Origin", "*")
        else:
            headers.set("Access-Control-Allow-Origin", origin)
            headers.set("Vary", "Origin")

        if cfg.allow_credentials:
            headers.set("Access-Control-Allow-Credentials", "true")

        if cfg.expose_headers:
            headers.set("Access-Control-Expose-Headers", ", ".join(cfg.expose_headers))

    def _preflight(self, writer: ResponseWriter, request_method: str | None) -> None:
        cfg = self.config
        headers = writer.headers

        if request_method:
            headers.set("Access-Control-Allow-Methods", ", ".join(cfg.allow_methods))

        if cfg.allow_headers:
            headers.set("Access-Control-Allow-Headers", ", ".join(cfg.allow_headers))

        headers.set("Access-Control-Max-Age", str(cfg.max_age))
        writer.write_header(204)

    def __call__(self, writer: ResponseWriter, request: Request) -> None:
        origin = request.header("Origin")

        # No Origin header — not a CORS request
        if origin is None or not self._is_allowed_origin(origin):
            return

        self._add_cors_headers(writer.headers, origin)

        if request.method == "OPTIONS":
            self._preflight(writer, request.header("Access-Control-Request-Method"))


class RequireHeaders:
    """End the pipeline when any of the named headers is missing.

    Responds with *status* and a JSON-encoded message naming the first
    missing header, the same body shape as the router's own 405/406::

        router.middleware(RequireHeaders("Authorization"))
    """

    __slots__ = ("names", "status")

    def __init__(self, *names: str, status: int = 400) -> None:
        self.names = names
        self.status = status

    def __call__(self, writer: ResponseWriter, request: Request) -> None:
        for name in self.names:
            if request.header(name) is None:
                writer.headers.set("Content-Type", JSON_CONTENT_TYPE)
                writer.write(json.dumps(f"missing header {name}"))
                writer.write_header(self.status)
                return
