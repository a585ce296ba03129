"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    def mw(writer: ResponseWriter, request: Request) -> None

Built-in middleware:
    CORSMiddleware -- Cross-Origin Resource Sharing
    RequireHeaders -- Reject requests missing required headers
"""

from lumen.middleware.builtin import CORSConfig, CORSMiddleware, RequireHeaders
from lumen.middleware.chain import MiddlewareChain
from lumen.middleware.protocol import Middleware

__all__ = [
    "CORSConfig",
    "CORSMiddleware",
    "Middleware",
    "MiddlewareChain",
    "RequireHeaders",
]
