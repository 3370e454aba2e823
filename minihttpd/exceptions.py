"""Server-specific exceptions, each carrying the HTTP status it maps to."""

from http import HTTPStatus


class HTTPServerError(Exception):
    """Base exception for HTTP server errors."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR


class ParseError(HTTPServerError):
    """Base exception for malformed requests."""

    status = HTTPStatus.BAD_REQUEST


class EmptyRequestError(ParseError):
    """Raised when request bytes are empty"""


class MissingSeparatorError(ParseError):
    """Raised when the blank line ending the header block is absent"""


class InvalidEncodingError(ParseError):
    """Raised when the request head cannot be decoded as UTF-8"""


class InvalidRequestLineError(ParseError):
    """Raised when request line format is invalid"""


class InvalidHeaderError(ParseError):
    """Raised when header format is malformed"""


class MissingHeaderError(ParseError):
    """Raised when a route needs a header the client did not send"""


class PathInvalidError(HTTPServerError):
    """Missing or unreadable file, or a path escaping the serving root."""

    status = HTTPStatus.NOT_FOUND


class ReadOverflowError(HTTPServerError):
    """Request does not fit in the read buffer."""

    status = HTTPStatus.REQUEST_URI_TOO_LONG


class WriteError(HTTPServerError):
    """Target directory or file could not be created or written."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR


class UnsupportedRouteError(HTTPServerError):
    """Method and path combination is not implemented."""

    status = HTTPStatus.NOT_IMPLEMENTED
