from dataclasses import dataclass, field
from http import HTTPStatus

from minihttpd.http_constants import CRLF, HTTP_VERSION, HTTPHeaders

# Phrases pinned here because HTTPStatus renamed some of them across Python releases.
REASON_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.CREATED: "Created",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.REQUEST_URI_TOO_LONG: "URI Too Long",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
    HTTPStatus.NOT_IMPLEMENTED: "Not Implemented",
}


@dataclass
class HttpResponse:
    status: HTTPStatus
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None

    @classmethod
    def empty(cls, status: HTTPStatus) -> "HttpResponse":
        """Status line only, no headers and no body."""
        return cls(status)

    @classmethod
    def with_body(cls, status: HTTPStatus, content_type: str, body: bytes) -> "HttpResponse":
        return cls(status, {HTTPHeaders.CONTENT_TYPE.value: content_type}, body)

    @property
    def status_line(self) -> str:
        phrase = REASON_PHRASES.get(self.status, self.status.phrase)
        return f"{HTTP_VERSION} {self.status.value} {phrase}"

    def to_bytes(self) -> bytes:
        """
        Serialize to wire format.

        With a body, Content-Length is appended after the other headers and
        always equals the body's byte length. Without one, the header block
        is still closed by a blank line and nothing follows it.
        """
        headers_lines = [f"{key}: {value}" for key, value in self.headers.items()]
        body_content = b""
        if self.body is not None:
            body_content = bytes(self.body)
            headers_lines.append(f"{HTTPHeaders.CONTENT_LENGTH.value}: {len(body_content)}")

        head = "".join(f"{line}{CRLF}" for line in [self.status_line, *headers_lines])
        return f"{head}{CRLF}".encode() + body_content
