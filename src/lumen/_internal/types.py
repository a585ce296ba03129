"""Shared type aliases used across lumen modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

from lumen.http.request import Request
from lumen.http.writer import ResponseWriter

# Route handler and middleware share one shape: write into the writer, return nothing
Handler: TypeAlias = Callable[[ResponseWriter, Request], Any]
