from minihttpd.exceptions import (
    EmptyRequestError,
    InvalidEncodingError,
    InvalidHeaderError,
    InvalidRequestLineError,
    MissingSeparatorError,
)
from minihttpd.http_request import HTTPRequest

# HTTP Protocol Constants
LINE_SEPARATOR = b"\r\n"
HEADER_BODY_SEPARATOR = b"\r\n\r\n"
HEADER_KEY_VALUE_SEPARATOR = ":"
HEADER_OWS = " \t"
HTTP_VERSION_PREFIX = "HTTP/"
DEFAULT_ENCODING = "utf-8"


class RequestParser:
    """HTTP request parser with validation and error handling"""

    @staticmethod
    def parse(raw_bytes: bytes) -> HTTPRequest:
        """
        Parse raw HTTP request bytes into HTTPRequest object.

        Everything after the first blank line is the body, whatever
        Content-Length says.

        Args:
            raw_bytes: Raw HTTP request as bytes

        Returns:
            HTTPRequest object with parsed data

        Raises:
            ParseError: If request is malformed or invalid
        """
        if not raw_bytes:
            raise EmptyRequestError("Received empty request")

        head, separator, body = raw_bytes.partition(HEADER_BODY_SEPARATOR)
        if not separator:
            raise MissingSeparatorError("Request head is not terminated by a blank line")

        try:
            head_text = head.decode(DEFAULT_ENCODING)
        except UnicodeDecodeError as e:
            raise InvalidEncodingError(f"Invalid UTF-8 encoding: {e}") from e

        req_line, _, header_string = head_text.partition(LINE_SEPARATOR.decode())
        method, path, version = RequestParser._parse_request_line(req_line)
        headers = RequestParser._parse_headers(header_string)

        return HTTPRequest(
            method=method,
            path=path,
            version=version,
            headers=headers,
            body=body,
            raw=raw_bytes,
        )

    @staticmethod
    def find_header_value(raw_bytes: bytes, name: str) -> str | None:
        """
        Scan the request head for ``\\r\\n<name>: `` and return the text up to
        the next CRLF, or None when the header is not present.
        """
        head = raw_bytes.partition(HEADER_BODY_SEPARATOR)[0] + LINE_SEPARATOR
        marker = LINE_SEPARATOR + f"{name}: ".encode(DEFAULT_ENCODING)
        start = head.find(marker)
        if start == -1:
            return None
        start += len(marker)
        end = head.find(LINE_SEPARATOR, start)
        return head[start:end].decode(DEFAULT_ENCODING, errors="replace")

    @staticmethod
    def _parse_request_line(line: str) -> tuple[str, str, str]:
        """
        Parse HTTP request line into method, path and version.

        Args:
            line: Request line string (e.g., "GET /path HTTP/1.1")

        Returns:
            Tuple of (method, path without its leading slash, version)

        Raises:
            InvalidRequestLineError: If request line format is invalid
        """
        components = line.split(" ")
        if len(components) != 3 or not all(components):
            raise InvalidRequestLineError(
                f"Invalid request line format. Expected 3 components, got {len(components)}"
            )

        method, target, version = components
        if not target.startswith("/"):
            raise InvalidRequestLineError(f"Request target must start with '/': {target}")
        if not version.startswith(HTTP_VERSION_PREFIX):
            raise InvalidRequestLineError(f"Invalid HTTP version: {version}")
        return method, target[1:], version

    @staticmethod
    def _parse_headers(header_string: str) -> dict[str, str]:
        """
        Parse header string into dictionary, keeping names as sent.

        Args:
            header_string: Raw headers string

        Returns:
            Dictionary of header key-value pairs

        Raises:
            InvalidHeaderError: If a header line has no name or no colon
        """
        headers_dict: dict[str, str] = {}
        if not header_string:
            return headers_dict

        for header in header_string.split(LINE_SEPARATOR.decode()):
            key, separator, value = header.partition(HEADER_KEY_VALUE_SEPARATOR)
            if not separator or not key or any(ch in HEADER_OWS for ch in key):
                raise InvalidHeaderError(f"Malformed header line: {header!r}")
            headers_dict.setdefault(key, value.strip(HEADER_OWS))
        return headers_dict
