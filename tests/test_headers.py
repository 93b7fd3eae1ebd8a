"""Tests for trill.http.headers and trill.http.query."""

from trill.http.headers import Headers
from trill.http.query import QueryParams


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers(((b"Content-Type", b"text/plain"),))
        assert headers["content-type"] == "text/plain"
        assert headers["CONTENT-TYPE"] == "text/plain"
        assert "Content-Type" in headers

    def test_multiple_values(self) -> None:
        headers = Headers(((b"accept", b"a"), (b"Accept", b"b")))
        assert headers["accept"] == "a"
        assert headers.get_list("ACCEPT") == ["a", "b"]
        assert len(headers) == 1

    def test_missing(self) -> None:
        headers = Headers()
        assert headers.get("x-missing") is None
        assert headers.get_list("x-missing") == []
        assert 42 not in headers

    def test_raw_preserved(self) -> None:
        raw = ((b"X-A", b"1"),)
        assert Headers(raw).raw == raw


class TestQueryParams:
    def test_first_value(self) -> None:
        query = QueryParams(b"tag=a&tag=b&q=")
        assert query["tag"] == "a"
        assert query.get_list("tag") == ["a", "b"]
        assert query["q"] == ""

    def test_missing(self) -> None:
        query = QueryParams()
        assert query.get("q") is None
        assert len(query) == 0

    def test_raw(self) -> None:
        assert QueryParams(b"a=1").raw == b"a=1"
