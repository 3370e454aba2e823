"""Tests for turning raw request bytes into HTTPRequest objects."""

import pytest

from minihttpd.exceptions import (
    EmptyRequestError,
    InvalidEncodingError,
    InvalidHeaderError,
    InvalidRequestLineError,
    MissingSeparatorError,
    ParseError,
)
from minihttpd.request_parser import RequestParser


class TestParse:
    def test_request_line_and_headers(self):
        raw = b"GET /echo/abc HTTP/1.1\r\nHost: localhost:4221\r\nUser-Agent: curl/7.81\r\n\r\n"
        request = RequestParser.parse(raw)

        assert request.method == "GET"
        assert request.path == "echo/abc"
        assert request.version == "HTTP/1.1"
        assert request.headers == {"Host": "localhost:4221", "User-Agent": "curl/7.81"}
        assert request.body == b""

    def test_root_path_is_empty(self):
        assert RequestParser.parse(b"GET / HTTP/1.1\r\n\r\n").path == ""

    def test_headers_keep_order(self):
        raw = b"GET / HTTP/1.1\r\nB: 2\r\nA: 1\r\nC: 3\r\n\r\n"
        assert list(RequestParser.parse(raw).headers) == ["B", "A", "C"]

    def test_header_lookup_is_case_sensitive(self):
        request = RequestParser.parse(b"GET / HTTP/1.1\r\nuser-agent: lower\r\n\r\n")
        assert request.get_header("user-agent") == "lower"
        assert request.get_header("User-Agent") is None

    def test_duplicate_header_keeps_first(self):
        raw = b"GET / HTTP/1.1\r\nUser-Agent: first\r\nUser-Agent: second\r\n\r\n"
        request = RequestParser.parse(raw)
        assert request.get_header("User-Agent") == "first"
        assert request.raw == raw

    def test_header_value_whitespace_is_trimmed(self):
        request = RequestParser.parse(b"GET / HTTP/1.1\r\nX-Thing:   spaced out \t\r\n\r\n")
        assert request.get_header("X-Thing") == "spaced out"

    def test_body_is_everything_after_blank_line(self):
        raw = b"POST /files/a HTTP/1.1\r\nContent-Length: 2\r\n\r\nhello\r\n\r\nworld"
        assert RequestParser.parse(raw).body == b"hello\r\n\r\nworld"

    def test_body_keeps_binary_bytes(self):
        body = bytes(range(256))
        raw = b"POST /files/bin HTTP/1.1\r\n\r\n" + body
        assert RequestParser.parse(raw).body == body

    def test_query_string_is_part_of_path(self):
        assert RequestParser.parse(b"GET /echo/a?b=c HTTP/1.1\r\n\r\n").path == "echo/a?b=c"


class TestParseErrors:
    @pytest.mark.parametrize(
        "raw, error",
        [
            (b"", EmptyRequestError),
            (b"GET / HTTP/1.1\r\nHost: x\r\n", MissingSeparatorError),
            (b"GET /\xff HTTP/1.1\r\n\r\n", InvalidEncodingError),
            (b"GET /\r\n\r\n", InvalidRequestLineError),
            (b"GET echo/abc HTTP/1.1\r\n\r\n", InvalidRequestLineError),
            (b"GET / FTP/1.0\r\n\r\n", InvalidRequestLineError),
            (b"GET  / HTTP/1.1\r\n\r\n", InvalidRequestLineError),
            (b"GET / HTTP/1.1 extra\r\n\r\n", InvalidRequestLineError),
            (b"GET / HTTP/1.1\r\nno colon here\r\n\r\n", InvalidHeaderError),
            (b"GET / HTTP/1.1\r\n: empty-name\r\n\r\n", InvalidHeaderError),
            (b"GET / HTTP/1.1\r\nBad Name: x\r\n\r\n", InvalidHeaderError),
        ],
    )
    def test_malformed_requests_raise(self, raw, error):
        with pytest.raises(error):
            RequestParser.parse(raw)

    def test_all_errors_are_parse_errors(self):
        with pytest.raises(ParseError):
            RequestParser.parse(b"nonsense")


class TestFindHeaderValue:
    def test_finds_value_up_to_crlf(self):
        raw = b"GET /user-agent HTTP/1.1\r\nUser-Agent: curl/7.81\r\nAccept: */*\r\n\r\n"
        assert RequestParser.find_header_value(raw, "User-Agent") == "curl/7.81"

    def test_last_header_before_blank_line(self):
        raw = b"GET / HTTP/1.1\r\nHost: a\r\nUser-Agent: foo/1\r\n\r\n"
        assert RequestParser.find_header_value(raw, "User-Agent") == "foo/1"

    def test_missing_header(self):
        assert RequestParser.find_header_value(b"GET / HTTP/1.1\r\n\r\n", "User-Agent") is None

    def test_ignores_body(self):
        raw = b"POST /files/x HTTP/1.1\r\n\r\n\r\nUser-Agent: smuggled\r\n"
        assert RequestParser.find_header_value(raw, "User-Agent") is None
