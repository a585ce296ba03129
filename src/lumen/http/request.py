"""Immutable HTTP request.

Frozen metadata parsed from an API Gateway proxy event. The request is
honest about what it is: received data that doesn't change.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

_EMPTY: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``headers`` and ``query`` keep the keys exactly as API Gateway delivered
    them. Route constraints compare keys by exact presence.
    """

    method: str
    path: str = "/"
    headers: Mapping[str, str] = _EMPTY
    query: Mapping[str, str] = _EMPTY
    body: str = ""
    request_id: str = ""
    is_base64_encoded: bool = False
    path_params: Mapping[str, str] = _EMPTY
    stage_variables: Mapping[str, str] = _EMPTY

    # The raw proxy event, for handlers that need fields not lifted above
    event: Mapping[str, Any] = field(default=_EMPTY, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Mapping fields become read-only copies, however the request was built
        for name in ("headers", "query", "path_params", "stage_variables"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))

    # -- Computed properties --

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive header lookup, for code that doesn't care how the client spelled it."""
        if name in self.headers:
            return self.headers[name]
        name_lower = name.lower()
        for key, value in self.headers.items():
            if key.lower() == name_lower:
                return value
        return default

    # -- Factory --

    @classmethod
    def from_event(cls, event: Mapping[str, Any]) -> Request:
        """Create a Request from an API Gateway proxy event.

        API Gateway sends ``null`` for absent header, query and path maps;
        those become empty mappings.
        """
        context = event.get("requestContext") or {}
        return cls(
            method=event.get("httpMethod") or "",
            path=event.get("path") or "/",
            headers=event.get("headers"),
            query=event.get("queryStringParameters"),
            body=event.get("body") or "",
            request_id=context.get("requestId") or "",
            is_base64_encoded=bool(event.get("isBase64Encoded", False)),
            path_params=event.get("pathParameters"),
            stage_variables=event.get("stageVariables"),
            event=event,
        )


def _frozen(values: Mapping[str, str] | None) -> Mapping[str, str]:
    if not values:
        return _EMPTY
    return MappingProxyType(dict(values))
