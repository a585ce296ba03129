"""Lumen — request routing for AWS Lambda functions behind API Gateway.

One invocation, one request: lumen picks the registered handler, runs it
behind your middleware and a recovery boundary, and returns the proxy
response.

Basic usage::

    from lumen import Router

    router = Router()

    def index(w, r):
        w.write_header(200)
        w.write("Hello, World!")

    router.handler("GET", index)

    def lambda_handler(event, context):
        return router(event, context)
"""

__version__ = "0.1.0"
__all__ = [
    "WILDCARD",
    "ConfigurationError",
    "HTTPError",
    "Headers",
    "LumenError",
    "MethodNotAllowed",
    "Middleware",
    "NotAcceptable",
    "Panic",
    "PanicInfo",
    "RecoverFunc",
    "RecoveredError",
    "Request",
    "Response",
    "ResponseEncodingError",
    "ResponseWriter",
    "Route",
    "Router",
    "RouterConfig",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import lumen`` fast (it runs on every cold start) while
    providing a clean top-level API.
    """
    if name == "Router":
        from lumen.app import Router

        return Router

    if name == "RouterConfig":
        from lumen.config import RouterConfig

        return RouterConfig

    if name == "Request":
        from lumen.http.request import Request

        return Request

    if name == "Response":
        from lumen.http.response import Response

        return Response

    if name == "ResponseWriter":
        from lumen.http.writer import ResponseWriter

        return ResponseWriter

    if name == "Headers":
        from lumen.http.headers import Headers

        return Headers

    if name in ("Route", "WILDCARD"):
        from lumen.routing import route as _route

        return getattr(_route, name)

    if name == "Middleware":
        from lumen.middleware.protocol import Middleware

        return Middleware

    if name in ("PanicInfo", "RecoverFunc"):
        from lumen.server import recovery as _recovery

        return getattr(_recovery, name)

    if name in (
        "ConfigurationError",
        "HTTPError",
        "LumenError",
        "MethodNotAllowed",
        "NotAcceptable",
        "Panic",
        "RecoveredError",
        "ResponseEncodingError",
    ):
        from lumen import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
