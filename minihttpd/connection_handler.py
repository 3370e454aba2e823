"""Single-request connection pipeline."""

import socket
from http import HTTPStatus
from logging import Logger

from minihttpd.config import (
    BUFFER_SIZE,
    DRAIN_LIMIT,
    DRAIN_TIMEOUT,
    MAX_REQUEST_LINE,
    READ_TIMEOUT,
)
from minihttpd.exceptions import HTTPServerError, ReadOverflowError
from minihttpd.http_response import HttpResponse
from minihttpd.request_parser import LINE_SEPARATOR, RequestParser
from minihttpd.router import Router


class ConnectionHandler:
    """
    Serve exactly one request per connection.

    receive -> parse -> route -> build -> send -> close, in one pass.
    A connection that delivers nothing (peer closed, read error, read
    timeout) is closed without a response.
    """

    def __init__(
        self,
        router: Router,
        logger: Logger,
        max_request_size: int = BUFFER_SIZE,
        max_request_line: int = MAX_REQUEST_LINE,
        read_timeout: float | None = READ_TIMEOUT,
        drain_timeout: float = DRAIN_TIMEOUT,
        drain_limit: int = DRAIN_LIMIT,
    ):
        """
        Args:
            router: Router used to dispatch parsed requests
            logger: Logger instance for debug/info/error messages
            max_request_size: Read buffer capacity in bytes; larger requests get 414
            max_request_line: Longest accepted request line in bytes
            read_timeout: Seconds to wait for the request, None to wait forever
            drain_timeout: Seconds to wait for leftover input after responding
            drain_limit: Most leftover bytes read and discarded before closing
        """
        self.router = router
        self.logger = logger
        self.max_request_size = max_request_size
        self.max_request_line = max_request_line
        self.read_timeout = read_timeout
        self.drain_timeout = drain_timeout
        self.drain_limit = drain_limit

    def handle(self, connection: socket.socket, client_address) -> None:
        self.logger.info(f"Connection received from: {client_address}")
        with connection:
            raw_request = self._receive_request(connection, client_address)
            if raw_request is None:
                return

            response = self.respond(raw_request)
            try:
                connection.sendall(response)
                connection.shutdown(socket.SHUT_WR)
            except OSError as e:
                self.logger.warning(f"Error sending response to {client_address}: {e}")
                return
            self.logger.info(f"Sent response to {client_address}")
            self._discard_unread_input(connection, client_address)
        self.logger.debug(f"Closed connection from {client_address}")

    def respond(self, raw_request: bytes) -> bytes:
        """Turn one raw request into the raw response bytes."""
        return self.build_response(raw_request).to_bytes()

    def build_response(self, raw_request: bytes) -> HttpResponse:
        try:
            self._check_request_size(raw_request)
            http_request = RequestParser.parse(raw_request)
            self.logger.debug(f"{http_request.method} /{http_request.path}")
            response = self.router.dispatch(http_request)
        except HTTPServerError as e:
            self.logger.warning(f"Rejected request ({e.status.value}): {e}")
            return HttpResponse.empty(e.status)
        except Exception as e:
            self.logger.error(f"Unexpected error while building response: {e}", exc_info=True)
            return HttpResponse.empty(HTTPStatus.INTERNAL_SERVER_ERROR)

        self.logger.debug(f"Responding {response.status_line}")
        return response

    def _receive_request(self, connection: socket.socket, client_address) -> bytes | None:
        """
        Read the request with a single bounded recv.

        One byte beyond capacity is requested so an oversized request can
        be told apart from one that fills the buffer exactly.

        Returns:
            Request bytes or None if connection closed/timeout
        """
        self.logger.debug(f"Waiting for data from {client_address}...")
        connection.settimeout(self.read_timeout)
        try:
            data = connection.recv(self.max_request_size + 1)
        except socket.timeout:
            self.logger.debug(f"Read timeout for {client_address}")
            return None
        except OSError as e:
            self.logger.warning(f"Failed to read request from {client_address}: {e}")
            return None

        if not data:
            self.logger.info(f"Connection closed by {client_address}")
            return None

        self.logger.info(f"Received {len(data)} bytes from {client_address}")
        return data

    def _discard_unread_input(self, connection: socket.socket, client_address) -> None:
        """
        Read and drop whatever the client is still sending.

        Closing a socket with unread input makes the kernel reset the
        connection, and the reset can destroy a response the client has
        not read yet (the 414 for an oversized upload, typically).
        """
        connection.settimeout(self.drain_timeout)
        discarded = 0
        try:
            while discarded < self.drain_limit:
                chunk = connection.recv(min(65536, self.drain_limit - discarded))
                if not chunk:
                    break
                discarded += len(chunk)
        except OSError as e:
            self.logger.debug(f"Stopped draining {client_address}: {e}")

        if discarded:
            self.logger.debug(f"Discarded {discarded} unread bytes from {client_address}")

    def _check_request_size(self, raw_request: bytes) -> None:
        if len(raw_request) > self.max_request_size:
            raise ReadOverflowError(
                f"Request exceeds buffer capacity of {self.max_request_size} bytes"
            )

        line_end = raw_request.find(LINE_SEPARATOR)
        line_length = len(raw_request) if line_end == -1 else line_end
        if line_length > self.max_request_line:
            raise ReadOverflowError(
                f"Request line of {line_length} bytes exceeds {self.max_request_line}"
            )
