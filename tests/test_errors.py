"""Tests for trill.errors: exception hierarchy and messages."""

import pytest

from trill.errors import (
    ConfigurationError,
    HTTPError,
    NotFound,
    RoutePatternError,
    TrillError,
)


class TestHierarchy:
    def test_http_error_is_trill_error(self) -> None:
        assert issubclass(HTTPError, TrillError)

    def test_not_found_is_http_error(self) -> None:
        assert issubclass(NotFound, HTTPError)

    def test_pattern_error_is_configuration_error(self) -> None:
        assert issubclass(RoutePatternError, ConfigurationError)
        assert issubclass(ConfigurationError, TrillError)


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=400, detail="Bad request body")) == "400: Bad request body"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_frozen(self) -> None:
        err = HTTPError(status=400)
        with pytest.raises(AttributeError):
            err.status = 500  # type: ignore[misc]


class TestNotFound:
    def test_defaults(self) -> None:
        err = NotFound()
        assert err.status == 404
        assert err.detail == "Not Found"


class TestRoutePatternError:
    def test_message(self) -> None:
        err = RoutePatternError("/x/:", "':' must be followed by a parameter name")
        assert err.pattern == "/x/:"
        assert str(err) == "Invalid route pattern '/x/:': ':' must be followed by a parameter name"
