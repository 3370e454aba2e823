from enum import Enum

CRLF = "\r\n"
HTTP_VERSION = "HTTP/1.1"


class HTTPHeaders(str, Enum):
    """Header names, matched exactly as clients send them."""

    USER_AGENT = "User-Agent"
    CONTENT_TYPE = "Content-Type"
    CONTENT_LENGTH = "Content-Length"


class HTTPMethod(str, Enum):
    """Methods the router knows about."""

    GET = "GET"
    POST = "POST"


class RoutePrefix(str, Enum):
    """Path prefixes inspected by the router, without the leading slash."""

    ROOT = ""
    ECHO = "echo/"
    USER_AGENT = "user-agent"
    FILES = "files/"


class ContentType(str, Enum):
    TEXT_PLAIN = "text/plain"
    OCTET_STREAM = "application/octet-stream"
