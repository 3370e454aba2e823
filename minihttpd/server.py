"""Threaded HTTP/1.1 server: one worker thread per accepted connection."""

import socket
import threading
import time
from logging import Logger
from threading import Thread

from minihttpd.config import ACCEPT_POLL_INTERVAL, ServerConfig
from minihttpd.connection_handler import ConnectionHandler
from minihttpd.file_manager import FileManager
from minihttpd.route_handler import (
    EchoHandler,
    FileHandler,
    RelativeFileHandler,
    RootHandler,
    StoreFileHandler,
    UserAgentHandler,
)
from minihttpd.router import Route, Router


class HTTPServer:
    """
    Accept loop that hands every connection to its own thread.

    Features:
    - Thread per connection, tracked so shutdown can drain them
    - Stops accepting once the stop event is set
    - Pluggable routing via Router
    """

    def __init__(self, logger: Logger, config: ServerConfig, router: Router | None = None):
        """
        Initialize HTTP server.

        Args:
            logger: Logger instance for debug/info/error messages
            config: Bind address, files directory and request limits
            router: Optional Router instance (creates default if None)
        """
        self.logger = logger
        self.config = config
        self.router = router or self._create_default_router()
        self.connection_handler = ConnectionHandler(
            self.router,
            logger,
            max_request_size=config.max_request_size,
            max_request_line=config.max_request_line,
            read_timeout=config.read_timeout,
            drain_timeout=config.drain_timeout,
            drain_limit=config.drain_limit,
        )
        self.server_address: tuple[str, int] | None = None
        self._stop_event = threading.Event()
        self._ready = threading.Event()
        self._workers: set[Thread] = set()
        self._workers_lock = threading.Lock()

    def _create_default_router(self) -> Router:
        """
        Create router with standard handlers.

        Returns:
            Router instance with registered handlers
        """
        files = FileManager(self.config.files_directory, self.logger)
        working_directory = FileManager("", self.logger)

        router = Router(is_servable=working_directory.is_servable)
        router.register(Route.PING, RootHandler())
        router.register(Route.ECHO, EchoHandler())
        router.register(Route.USER_AGENT, UserAgentHandler())
        router.register(Route.CONFIGURED_DIR_FILE, FileHandler(files))
        router.register(Route.RELATIVE_FILE, RelativeFileHandler(working_directory))
        router.register(Route.STORE_FILE, StoreFileHandler(files))
        return router

    def serve_forever(self, stop_event: threading.Event | None = None) -> None:
        """
        Accept connections until the stop event is set, then drain workers.

        Args:
            stop_event: Cancellation signal; defaults to the one set by shutdown()
        """
        if stop_event is not None:
            self._stop_event = stop_event

        address = (self.config.host, self.config.port)
        with socket.create_server(address, reuse_port=True) as server:
            server.settimeout(ACCEPT_POLL_INTERVAL)
            self.server_address = server.getsockname()[:2]
            self.logger.info(f"Listening on {self.server_address[0]}:{self.server_address[1]}")
            self._ready.set()

            while not self._stop_event.is_set():
                try:
                    connection, client_address = server.accept()
                except socket.timeout:
                    continue
                except OSError as e:
                    self.logger.error(f"Failed to accept connection: {e}")
                    continue
                self._start_worker(connection, client_address)

        self._drain_workers()
        self.logger.info("Server shut down!")

    def shutdown(self) -> None:
        """Ask the accept loop to stop; returns immediately."""
        self._stop_event.set()

    def wait_until_ready(self, timeout: float | None = None) -> bool:
        """Block until the listening socket is bound."""
        return self._ready.wait(timeout)

    @property
    def active_workers(self) -> int:
        with self._workers_lock:
            return len(self._workers)

    def _start_worker(self, connection: socket.socket, client_address) -> None:
        thread = Thread(
            target=self._run_worker,
            args=(connection, client_address),
            daemon=True,
        )
        with self._workers_lock:
            self._workers.add(thread)
        thread.start()

    def _run_worker(self, connection: socket.socket, client_address) -> None:
        try:
            self.connection_handler.handle(connection, client_address)
        except Exception as e:
            self.logger.error(
                f"Error while processing request for {client_address}: {e}",
                exc_info=True,
            )
        finally:
            with self._workers_lock:
                self._workers.discard(threading.current_thread())

    def _drain_workers(self) -> None:
        with self._workers_lock:
            workers = list(self._workers)
        if not workers:
            return

        self.logger.info(f"Waiting for {len(workers)} connection(s) to finish")
        deadline = time.monotonic() + self.config.shutdown_grace_period
        for worker in workers:
            worker.join(max(0.0, deadline - time.monotonic()))

        still_running = self.active_workers
        if still_running:
            self.logger.warning(f"{still_running} connection(s) still open after shutdown")
