"""Test client for lumen routers.

Uses the same Request and Response types as production.
No wrapper translation layer.
"""

import uuid
from collections.abc import Mapping
from typing import Any

from lumen.app import Router
from lumen.http.request import Request
from lumen.http.response import Response


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Synchronous test client for lumen routers.

    Builds ``Request`` objects and dispatches them through
    ``Router.handle()``. ``event()`` goes through the Lambda entry point
    instead, for tests that care about the proxy event shape.

    Usage::

        client = TestClient(router)
        response = client.get(headers={"X-Key": "abc"})
        assert response.status == 200
    """

    __slots__ = ("router",)

    def __init__(self, router: Router) -> None:
        self.router = router

    def get(self, path: str = "/", **kwargs: Any) -> Response:
        """Send a GET request."""
        return self.request("GET", path, **kwargs)

    def post(self, path: str = "/", **kwargs: Any) -> Response:
        """Send a POST request."""
        return self.request("POST", path, **kwargs)

    def put(self, path: str = "/", **kwargs: Any) -> Response:
        """Send a PUT request."""
        return self.request("PUT", path, **kwargs)

    def patch(self, path: str = "/", **kwargs: Any) -> Response:
        """Send a PATCH request."""
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str = "/", **kwargs: Any) -> Response:
        """Send a DELETE request."""
        return self.request("DELETE", path, **kwargs)

    def request(
        self,
        method: str,
        path: str = "/",
        *,
        headers: Mapping[str, str] | None = None,
        query: Mapping[str, str] | None = None,
        body: str = "",
        request_id: str | None = None,
    ) -> Response:
        """Send a request with an arbitrary method."""
        request = Request(
            method=method,
            path=path,
            headers=dict(headers or {}),
            query=dict(query or {}),
            body=body,
            request_id=request_id or str(uuid.uuid4()),
        )
        return self.router.handle(request)

    def event(
        self,
        method: str,
        path: str = "/",
        *,
        headers: Mapping[str, str] | None = None,
        query: Mapping[str, str] | None = None,
        body: str | None = None,
        request_id: str | None = None,
    ) -> dict[str, Any]:
        """Invoke the router's Lambda entry point with a proxy event."""
        return self.router(
            make_event(
                method,
                path,
                headers=headers,
                query=query,
                body=body,
                request_id=request_id,
            )
        )


def make_event(
    method: str,
    path: str = "/",
    *,
    headers: Mapping[str, str] | None = None,
    query: Mapping[str, str] | None = None,
    body: str | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    """Build an API Gateway proxy event.

    Absent header and query maps are sent as ``None``, the way API
    Gateway sends them.
    """
    return {
        "resource": path,
        "path": path,
        "httpMethod": method,
        "headers": dict(headers) if headers else None,
        "queryStringParameters": dict(query) if query else None,
        "pathParameters": None,
        "stageVariables": None,
        "requestContext": {"requestId": request_id or str(uuid.uuid4())},
        "body": body,
        "isBase64Encoded": False,
    }
