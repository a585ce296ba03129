"""Tests for lumen.app — Router registration, dispatch and the Lambda entry point."""

import io
import json
import logging

import pytest

from lumen import Router
from lumen.config import RouterConfig
from lumen.errors import ConfigurationError, Panic, ResponseEncodingError
from lumen.http.request import Request
from lumen.http.writer import ResponseWriter
from lumen.server.recovery import PanicInfo
from lumen.testing import TestClient


def _ok(w: ResponseWriter, r: Request) -> None:
    w.write_header(200)
    w.write(b"ok")


def _secure(w: ResponseWriter, r: Request) -> None:
    w.write_header(200)
    w.write(b"secure")


@pytest.fixture
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def router(log_stream: io.StringIO) -> Router:
    return Router().logging(log_stream)


def _records(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


class TestEndToEnd:
    """The canonical GET/POST example."""

    @pytest.fixture
    def client(self, router: Router) -> TestClient:
        router.handler("GET", _ok)
        router.handler("POST", _secure).with_headers("X-Key", "abc")
        return TestClient(router)

    def test_get(self, client: TestClient) -> None:
        response = client.get()
        assert response.status == 200
        assert response.body == "ok"

    def test_post_without_header_is_406(self, client: TestClient) -> None:
        response = client.post(headers={})
        assert response.status == 406
        assert json.loads(response.body) == "not acceptable"
        assert response.headers == {"Content-Type": "application/json"}

    def test_put_is_405(self, client: TestClient) -> None:
        response = client.put()
        assert response.status == 405
        assert json.loads(response.body) == "not allowed"
        assert response.headers == {"Content-Type": "application/json"}

    def test_post_with_header(self, client: TestClient) -> None:
        response = client.post(headers={"X-Key": "abc"})
        assert response.status == 200
        assert response.body == "secure"


class TestRegistration:
    def test_handler_returns_chainable_route(self, router: Router) -> None:
        route = router.handler("GET", _ok).with_queries("page")
        assert router.routes == (route,)
        assert route.queries == {"page": "*"}

    def test_route_decorator(self, router: Router) -> None:
        @router.route("GET", headers=("X-Key", "abc"), queries=("page",))
        def keyed(w: ResponseWriter, r: Request) -> None:
            w.write_header(200)

        (route,) = router.routes
        assert route.handler is keyed
        assert route.headers == {"X-Key": "abc"}
        assert route.queries == {"page": "*"}

    def test_registration_is_logged(self, router: Router, log_stream: io.StringIO) -> None:
        router.handler("DELETE", _ok)
        record = _records(log_stream)[-1]
        assert record["message"] == "registered new handler"
        assert record["method"] == "DELETE"

    def test_empty_method_rejected(self, router: Router) -> None:
        with pytest.raises(ConfigurationError):
            router.handler("", _ok)

    def test_non_callable_recovery_rejected(self, router: Router) -> None:
        with pytest.raises(ConfigurationError):
            router.recovery("nope")  # type: ignore[arg-type]

    def test_builders_chain(self, router: Router) -> None:
        assert router.middleware(lambda w, r: None) is router
        assert router.recovery(lambda info: None) is router
        assert router.logging(io.StringIO()) is router


class TestDispatch:
    def test_unset_status_is_500(self, router: Router) -> None:
        router.handler("GET", lambda w, r: w.write(b"partial"))
        response = TestClient(router).get()
        assert response.status == 500
        assert response.body == "failed to obtain response"

    def test_handler_receives_request(self, router: Router) -> None:
        seen: list[Request] = []

        def handler(w: ResponseWriter, r: Request) -> None:
            seen.append(r)
            w.write_header(204)

        router.handler("GET", handler)
        request = Request("GET", request_id="req-1")
        assert router.handle(request).status == 204
        assert seen == [request]

    def test_handler_headers_in_response(self, router: Router) -> None:
        def handler(w: ResponseWriter, r: Request) -> None:
            w.headers.set("Content-Type", "text/plain")
            w.write_header(200)

        router.handler("GET", handler)
        assert TestClient(router).get().headers == {"Content-Type": "text/plain"}

    def test_middleware_runs_before_handler(self, router: Router) -> None:
        calls: list[str] = []

        def handler(w: ResponseWriter, r: Request) -> None:
            calls.append("handler")
            w.write_header(200)

        router.middleware(lambda w, r: calls.append("mw1"))
        router.middleware(lambda w, r: calls.append("mw2"))
        router.handler("GET", handler)
        TestClient(router).get()
        assert calls == ["mw1", "mw2", "handler"]

    def test_middleware_short_circuit_skips_handler(self, router: Router) -> None:
        calls: list[str] = []

        def deny(w: ResponseWriter, r: Request) -> None:
            w.write_header(401)
            w.write(b"denied")

        def handler(w: ResponseWriter, r: Request) -> None:
            calls.append("handler")

        router.middleware(deny)
        router.handler("GET", handler)
        response = TestClient(router).get()
        assert response.status == 401
        assert response.body == "denied"
        assert calls == []

    def test_middleware_cannot_alter_request_headers(self, router: Router) -> None:
        seen: list[dict[str, str]] = []

        def inject(w: ResponseWriter, r: Request) -> None:
            r.headers["X-Injected"] = "1"  # type: ignore[index]

        def handler(w: ResponseWriter, r: Request) -> None:
            seen.append(dict(r.headers))
            w.write_header(200)

        recovered: list[PanicInfo] = []
        router.recovery(recovered.append)
        router.middleware(inject)
        router.handler("GET", handler)
        request = Request("GET", headers={"X-Key": "abc"})

        assert router.handle(request).status == 500
        assert isinstance(recovered[0].error, TypeError)
        assert seen == []
        assert dict(request.headers) == {"X-Key": "abc"}

    def test_middleware_not_run_on_lookup_failure(self, router: Router) -> None:
        calls: list[str] = []
        router.middleware(lambda w, r: calls.append("mw"))
        router.handler("GET", _ok)
        assert TestClient(router).post().status == 405
        assert calls == []

    def test_first_registered_route_wins(self, router: Router) -> None:
        router.handler("GET", _ok)
        router.handler("GET", _secure)
        assert TestClient(router).get().body == "ok"

    def test_wildcard_query_constraint(self, router: Router) -> None:
        router.handler("GET", _secure).with_queries("token")
        router.handler("GET", _ok)
        client = TestClient(router)
        assert client.get(query={"token": "anything"}).body == "secure"
        assert client.get().body == "ok"


class TestRecovery:
    @pytest.mark.parametrize("payload", ["text", ValueError("structured"), 3.14])
    def test_panic_still_returns_response(self, router: Router, payload: object) -> None:
        def handler(w: ResponseWriter, r: Request) -> None:
            raise Panic(payload)

        router.handler("GET", handler)
        response = TestClient(router).get()
        assert response.status == 500
        assert response.body == "failed to obtain response"

    def test_written_state_survives_panic(self, router: Router) -> None:
        def handler(w: ResponseWriter, r: Request) -> None:
            w.write_header(202)
            w.write(b"half")
            raise RuntimeError("late failure")

        router.handler("GET", handler)
        response = TestClient(router).get()
        assert response.status == 202
        assert response.body == "half"

    def test_recovery_callback(self, router: Router) -> None:
        received: list[PanicInfo] = []

        def handler(w: ResponseWriter, r: Request) -> None:
            raise Panic("boom")

        router.handler("GET", handler)
        router.recovery(received.append)
        TestClient(router).get(request_id="req-7")

        (info,) = received
        assert str(info.error) == "boom"
        assert info.request.request_id == "req-7"
        assert info.stack

    def test_recovery_callback_can_write_response(self, router: Router) -> None:
        def handler(w: ResponseWriter, r: Request) -> None:
            raise Panic("boom")

        router.handler("GET", handler)
        writers: list[ResponseWriter] = []
        router.middleware(lambda w, r: writers.append(w))

        def recover(info: PanicInfo) -> None:
            writers[0].write_header(503)
            writers[0].write(b"try later")

        router.recovery(recover)
        response = TestClient(router).get()
        assert response.status == 503
        assert response.body == "try later"

    def test_middleware_panic_recovered(self, router: Router) -> None:
        def broken(w: ResponseWriter, r: Request) -> None:
            raise KeyError("missing")

        router.middleware(broken)
        router.handler("GET", _ok)
        assert TestClient(router).get().status == 500


class TestEncodingFailure:
    def test_error_body_encoding_failure_raises(self, log_stream: io.StringIO) -> None:
        def broken(data: object) -> str:
            raise TypeError("cannot encode")

        router = Router(serialize=broken).logging(log_stream)
        router.handler("GET", _ok)

        with pytest.raises(ResponseEncodingError):
            TestClient(router).put()

    def test_matched_requests_never_serialize(self, log_stream: io.StringIO) -> None:
        def broken(data: object) -> str:
            raise TypeError("cannot encode")

        router = Router(serialize=broken).logging(log_stream)
        router.handler("GET", _ok)
        assert TestClient(router).get().body == "ok"

    def test_custom_serializer(self, log_stream: io.StringIO) -> None:
        router = Router(serialize=lambda data: f"<{data}>").logging(log_stream)
        router.handler("GET", _ok)
        assert TestClient(router).put().body == "<not allowed>"

    def test_bytes_serializer(self, log_stream: io.StringIO) -> None:
        router = Router(serialize=lambda data: json.dumps(data).encode()).logging(log_stream)
        router.handler("GET", _ok)
        response = TestClient(router).put()
        assert response.status == 405
        assert response.body == '"not allowed"'


class TestLogging:
    def test_request_lifecycle_events(self, router: Router, log_stream: io.StringIO) -> None:
        router.handler("GET", _ok)
        TestClient(router).get(query={"page": "2"}, request_id="req-1")

        received, finished = _records(log_stream)[-2:]
        assert received["message"] == "handling incoming request"
        assert received["method"] == "GET"
        assert received["params"] == {"page": "2"}
        assert received["request_id"] == "req-1"

        assert finished["message"] == "finished handling request"
        assert finished["status"] == 200
        assert finished["request_id"] == "req-1"
        assert isinstance(finished["duration"], float)

    def test_panic_event(self, router: Router, log_stream: io.StringIO) -> None:
        def handler(w: ResponseWriter, r: Request) -> None:
            raise Panic("boom")

        router.handler("GET", handler)
        TestClient(router).get(request_id="req-2")
        messages = [r["message"] for r in _records(log_stream)]
        assert messages[-3:] == [
            "handling incoming request",
            "recovered from panic",
            "finished handling request",
        ]

    def test_custom_formatter(self, router: Router) -> None:
        stream = io.StringIO()
        router.logging(stream, logging.Formatter("%(levelname)s %(message)s"))
        router.handler("GET", _ok)
        assert stream.getvalue() == "INFO registered new handler\n"

    def test_routers_do_not_share_logs(self) -> None:
        a_stream, b_stream = io.StringIO(), io.StringIO()
        a = Router().logging(a_stream)
        Router().logging(b_stream)
        a.handler("GET", _ok)
        assert a_stream.getvalue()
        assert b_stream.getvalue() == ""

    def test_injected_logger(self) -> None:
        logger = logging.Logger("injected")
        router = Router(logger=logger)
        assert router.logger is logger

    def test_log_level_from_config(self) -> None:
        stream = io.StringIO()
        router = Router(RouterConfig(log_level="warning")).logging(stream)
        router.handler("GET", _ok)
        TestClient(router).get()
        assert stream.getvalue() == ""


class TestLambdaEntryPoint:
    def test_proxy_event_round_trip(self, router: Router) -> None:
        router.handler("POST", _secure).with_headers("X-Key", "abc")
        result = TestClient(router).event("POST", headers={"X-Key": "abc"})
        assert result == {
            "statusCode": 200,
            "headers": {},
            "body": "secure",
            "isBase64Encoded": False,
        }

    def test_null_headers_event(self, router: Router) -> None:
        router.handler("POST", _secure).with_headers("X-Key", "abc")
        result = TestClient(router).event("POST")
        assert result["statusCode"] == 406
        assert result["headers"] == {"Content-Type": "application/json"}

    def test_called_with_context(self, router: Router) -> None:
        router.handler("GET", _ok)
        event = {"httpMethod": "GET", "requestContext": {"requestId": "abc"}}
        assert router(event, object())["statusCode"] == 200
