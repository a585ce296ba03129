"""Tests for lumen.errors — exception hierarchy and error messages."""

import pytest

from lumen.errors import (
    ConfigurationError,
    HTTPError,
    LumenError,
    MethodNotAllowed,
    NotAcceptable,
    Panic,
    RecoveredError,
    ResponseEncodingError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls",
        [ConfigurationError, HTTPError, ResponseEncodingError, Panic, RecoveredError],
    )
    def test_is_lumen_error(self, cls: type) -> None:
        assert issubclass(cls, LumenError)

    def test_lookup_failures_are_http_errors(self) -> None:
        assert issubclass(MethodNotAllowed, HTTPError)
        assert issubclass(NotAcceptable, HTTPError)


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=400, detail="bad")) == "400: bad"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_frozen(self) -> None:
        err = HTTPError(status=400)
        with pytest.raises(AttributeError):
            err.status = 500  # type: ignore[misc]


class TestLookupFailures:
    def test_method_not_allowed(self) -> None:
        err = MethodNotAllowed()
        assert err.status == 405
        assert err.detail == "not allowed"

    def test_not_acceptable(self) -> None:
        err = NotAcceptable()
        assert err.status == 406
        assert err.detail == "not acceptable"

    def test_catchable_as_http_error(self) -> None:
        with pytest.raises(HTTPError):
            raise NotAcceptable()


class TestPanic:
    def test_keeps_payload(self) -> None:
        payload = {"code": 17}
        assert Panic(payload).value is payload


class TestErrorExports:
    """Error types are importable from the top-level lumen package."""

    def test_top_level_names(self) -> None:
        import lumen

        assert lumen.LumenError is LumenError
        assert lumen.Panic is Panic
        assert lumen.MethodNotAllowed is MethodNotAllowed

    def test_unknown_attribute(self) -> None:
        import lumen

        with pytest.raises(AttributeError):
            lumen.does_not_exist  # noqa: B018
