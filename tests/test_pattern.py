"""Tests for trill.routing.pattern: pattern compilation and matching."""

import pytest

from trill.errors import ConfigurationError, RoutePatternError
from trill.routing.pattern import (
    PathSegment,
    compile_pattern,
    match,
    parse_segment,
    split_path,
)


class TestSplitPath:
    def test_root(self) -> None:
        assert split_path("/") == [""]

    def test_empty_is_root(self) -> None:
        assert split_path("") == [""]

    def test_nested(self) -> None:
        assert split_path("/api/v2/users") == ["api", "v2", "users"]

    def test_keeps_empty_inner_segments(self) -> None:
        assert split_path("/a//b") == ["a", "", "b"]


class TestParseSegment:
    def test_literal(self) -> None:
        assert parse_segment("users") == PathSegment("users")

    def test_named(self) -> None:
        seg = parse_segment(":id")
        assert seg.is_param is True
        assert seg.param_name == "id"

    def test_wildcard(self) -> None:
        seg = parse_segment("*")
        assert seg.is_wildcard is True
        assert seg.param_name is None

    def test_colon_inside_literal(self) -> None:
        seg = parse_segment("v1:beta")
        assert seg.is_param is False
        assert seg.value == "v1:beta"

    def test_star_inside_literal(self) -> None:
        assert parse_segment("a*b").is_wildcard is False


class TestCompilePattern:
    def test_static_flags(self) -> None:
        pattern = compile_pattern("/users")
        assert pattern.is_static is True
        assert pattern.has_named_params is False
        assert pattern.has_wildcard is False

    def test_named_flags(self) -> None:
        pattern = compile_pattern("/users/:id/posts/:post_id")
        assert pattern.has_named_params is True
        assert pattern.param_names == ("id", "post_id")

    def test_wildcard_flags(self) -> None:
        pattern = compile_pattern("/static/*")
        assert pattern.has_wildcard is True
        assert pattern.has_named_params is False

    def test_empty_pattern_is_root(self) -> None:
        assert compile_pattern("").source == "/"

    def test_frozen(self) -> None:
        pattern = compile_pattern("/users")
        with pytest.raises(AttributeError):
            pattern.source = "/other"  # type: ignore[misc]


class TestMalformedPatterns:
    def test_bare_colon(self) -> None:
        with pytest.raises(RoutePatternError, match="parameter name"):
            compile_pattern("/users/:")

    def test_wildcard_not_last(self) -> None:
        with pytest.raises(RoutePatternError, match="final segment"):
            compile_pattern("/files/*/raw")

    def test_missing_leading_slash(self) -> None:
        with pytest.raises(RoutePatternError, match="start with '/'"):
            compile_pattern("users")

    def test_trailing_slash(self) -> None:
        with pytest.raises(RoutePatternError, match="trailing '/'"):
            compile_pattern("/users/")

    def test_duplicate_param(self) -> None:
        with pytest.raises(RoutePatternError, match="'id' appears more than once"):
            compile_pattern("/a/:id/b/:id")

    def test_reserved_param_name(self) -> None:
        with pytest.raises(RoutePatternError, match="'request' is reserved"):
            compile_pattern("/:request")

    def test_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            compile_pattern("/x/:")
        assert exc_info.value.pattern == "/x/:"  # type: ignore[attr-defined]


class TestStaticMatch:
    @pytest.mark.parametrize(
        ("pattern", "path", "ok"),
        [
            ("/", "/", True),
            ("/foo", "/foo", True),
            ("/foo", "/Foo", False),
            ("/foo", "/foo/bar", False),
            ("/foo/bar", "/foo", False),
            ("/a//b", "/a//b", True),
        ],
    )
    def test_exact_equality(self, pattern: str, path: str, ok: bool) -> None:
        params, matched = match(pattern, path)
        assert matched is ok
        assert params == {}

    def test_empty_path_is_root(self) -> None:
        assert compile_pattern("/").match("") is not None

    def test_no_wildcard_value(self) -> None:
        result = compile_pattern("/foo").match("/foo")
        assert result is not None
        assert result.wildcard is None


class TestNamedMatch:
    def test_single(self) -> None:
        assert match("/foo/:bar", "/foo/xyz") == ({"bar": "xyz"}, True)

    def test_two(self) -> None:
        assert match("/foo/:bar/:baz", "/foo/xyz/123") == ({"bar": "xyz", "baz": "123"}, True)

    def test_extra_segment_fails(self) -> None:
        assert match("/foo/:bar", "/foo/xyz/extra") == ({}, False)

    def test_missing_segment_fails(self) -> None:
        assert match("/foo/:bar/:baz", "/foo/xyz") == ({}, False)

    def test_literal_mismatch_fails(self) -> None:
        assert match("/foo/:bar", "/qux/xyz") == ({}, False)

    def test_empty_segment_not_bound(self) -> None:
        assert match("/foo/:bar/baz", "/foo//baz") == ({}, False)

    def test_raw_value_not_decoded(self) -> None:
        params, ok = match("/files/:name", "/files/a%20b")
        assert ok is True
        assert params == {"name": "a%20b"}

    def test_param_at_root(self) -> None:
        assert match("/:slug", "/hello") == ({"slug": "hello"}, True)
        assert match("/:slug", "/") == ({}, False)

    def test_literal_after_param(self) -> None:
        assert match("/users/:id/edit", "/users/7/edit") == ({"id": "7"}, True)
        assert match("/users/:id/edit", "/users/7/show") == ({}, False)

    def test_fresh_params_per_attempt(self) -> None:
        pattern = compile_pattern("/users/:id")
        first = pattern.match("/users/1")
        second = pattern.match("/users/2")
        assert first is not None and second is not None
        assert first.params == {"id": "1"}
        assert second.params == {"id": "2"}


class TestWildcardMatch:
    def test_matches_any_remainder(self) -> None:
        result = compile_pattern("/static/*").match("/static/css/site.css")
        assert result is not None
        assert result.params == {}
        assert result.wildcard == "css/site.css"

    def test_matches_bare_prefix(self) -> None:
        result = compile_pattern("/static/*").match("/static")
        assert result is not None
        assert result.wildcard == ""

    def test_prefix_must_match(self) -> None:
        assert compile_pattern("/static/*").match("/assets/site.css") is None
        assert compile_pattern("/static/*").match("/staticfiles/x") is None

    def test_root_wildcard_matches_everything(self) -> None:
        pattern = compile_pattern("/*")
        assert pattern.match("/") is not None
        result = pattern.match("/any/thing/at/all")
        assert result is not None
        assert result.wildcard == "any/thing/at/all"

    def test_named_before_wildcard(self) -> None:
        result = compile_pattern("/users/:id/*").match("/users/42/files/a/b")
        assert result is not None
        assert result.params == {"id": "42"}
        assert result.wildcard == "files/a/b"

    def test_wildcard_not_a_named_param(self) -> None:
        params, ok = match("/static/*", "/static/app.js")
        assert ok is True
        assert params == {}

    def test_too_short_fails(self) -> None:
        assert compile_pattern("/users/:id/*").match("/users") is None
