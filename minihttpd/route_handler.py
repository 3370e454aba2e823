"""Route handlers using protocol pattern for extensibility."""

from typing import Protocol
from http import HTTPStatus
from minihttpd.content_types import resolve_content_type
from minihttpd.exceptions import MissingHeaderError, PathInvalidError, WriteError
from minihttpd.file_manager import FileManager
from minihttpd.http_request import HTTPRequest
from minihttpd.http_response import HttpResponse
from minihttpd.request_parser import RequestParser
import minihttpd.http_constants as constants


class RouteHandler(Protocol):
    """Protocol for route handlers (structural subtyping)."""

    def handle(self, request: HTTPRequest) -> HttpResponse:
        """
        Handle HTTP request and return response.

        Args:
            request: Parsed HTTP request

        Returns:
            HTTP response to send to client
        """
        ...


def strip_prefix(path: str, prefix: constants.RoutePrefix) -> str:
    return path[len(prefix.value):]


class RootHandler:
    """Handler for root path '/'."""

    def handle(self, request: HTTPRequest) -> HttpResponse:
        """Return 200 OK with no body."""
        return HttpResponse.empty(HTTPStatus.OK)


class EchoHandler:
    """Handler for /echo/<text> - echoes back the text."""

    def handle(self, request: HTTPRequest) -> HttpResponse:
        """Echo everything after the prefix, slashes included, as text/plain."""
        text = strip_prefix(request.path, constants.RoutePrefix.ECHO)
        return HttpResponse.with_body(
            HTTPStatus.OK, constants.ContentType.TEXT_PLAIN.value, text.encode()
        )


class UserAgentHandler:
    """Handler for /user-agent - returns User-Agent header."""

    def handle(self, request: HTTPRequest) -> HttpResponse:
        """Return the User-Agent value exactly as the raw header scan finds it."""
        user_agent = RequestParser.find_header_value(
            request.raw, constants.HTTPHeaders.USER_AGENT.value
        )
        if user_agent is None:
            raise MissingHeaderError("User-Agent header is required")
        return HttpResponse.with_body(
            HTTPStatus.OK, constants.ContentType.TEXT_PLAIN.value, user_agent.encode()
        )


class FileHandler:
    """Handler for GET /files/<filename> from the configured directory."""

    def __init__(self, file_manager: FileManager):
        """
        Initialize FileHandler with a FileManager.

        Args:
            file_manager: FileManager rooted at the configured directory
        """
        self.file_manager = file_manager

    def handle(self, request: HTTPRequest) -> HttpResponse:
        """
        Serve the file as a download.

        Returns:
            200 with file content, 404 if missing or outside the directory
        """
        file_name = strip_prefix(request.path, constants.RoutePrefix.FILES)
        try:
            content = self.file_manager.read_file(file_name)
        except PathInvalidError:
            return HttpResponse.empty(HTTPStatus.NOT_FOUND)
        return HttpResponse.with_body(
            HTTPStatus.OK, constants.ContentType.OCTET_STREAM.value, content
        )


class RelativeFileHandler:
    """Handler for GET /<dir>/<file> relative to the working directory."""

    def __init__(self, file_manager: FileManager):
        self.file_manager = file_manager

    def handle(self, request: HTTPRequest) -> HttpResponse:
        """Serve the file with a Content-Type picked from its extension."""
        try:
            content = self.file_manager.read_file(request.path)
        except PathInvalidError:
            return HttpResponse.empty(HTTPStatus.NOT_FOUND)
        return HttpResponse.with_body(
            HTTPStatus.OK, resolve_content_type(request.path), content
        )


class StoreFileHandler:
    """Handler for POST /files/<filename> - stores the request body."""

    def __init__(self, file_manager: FileManager):
        self.file_manager = file_manager

    def handle(self, request: HTTPRequest) -> HttpResponse:
        """
        Write the request body to the configured directory.

        Returns:
            201 on success, 500 if the directory or file cannot be written
        """
        file_name = strip_prefix(request.path, constants.RoutePrefix.FILES)
        try:
            self.file_manager.write_file(file_name, request.body)
        except WriteError:
            return HttpResponse.empty(HTTPStatus.INTERNAL_SERVER_ERROR)
        return HttpResponse.empty(HTTPStatus.CREATED)
