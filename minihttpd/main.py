import argparse
import logging
import signal
import sys
import threading
from typing import TextIO

from minihttpd import config
from minihttpd.config import ServerConfig
from minihttpd.server import HTTPServer

QUIT_COMMAND = "q"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Minimal HTTP/1.1 server")
    parser.add_argument("--directory", default="", help="Files directory")
    parser.add_argument("--host", default=config.HOST, help="Address to bind")
    parser.add_argument("--port", type=int, default=config.PORT, help="Port to listen on")
    parser.add_argument(
        "--max-request-size",
        type=int,
        default=config.BUFFER_SIZE,
        help="Read buffer size in bytes; larger requests get 414",
    )
    parser.add_argument(
        "--max-request-line",
        type=int,
        default=config.MAX_REQUEST_LINE,
        help="Longest request line in bytes; longer ones get 414",
    )
    parser.add_argument(
        "--read-timeout",
        type=float,
        default=config.READ_TIMEOUT,
        help="Seconds to wait for a request before closing (default: no timeout)",
    )
    parser.add_argument(
        "--stdin-quit",
        action="store_true",
        help=f"Shut down when '{QUIT_COMMAND}' is entered on standard input",
    )
    parser.add_argument(
        "--log-level",
        default=config.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ServerConfig:
    return ServerConfig(
        files_directory=args.directory,
        host=args.host,
        port=args.port,
        max_request_size=args.max_request_size,
        max_request_line=args.max_request_line,
        read_timeout=args.read_timeout,
    )


def watch_stdin(stop_event: threading.Event, stream: TextIO = sys.stdin) -> None:
    """Set the stop event once the operator enters the quit command."""
    for line in stream:
        if line.strip() == QUIT_COMMAND:
            stop_event.set()
            return


def install_signal_handlers(stop_event: threading.Event) -> None:
    def request_stop(signum, frame):
        stop_event.set()

    signal.signal(signal.SIGINT, request_stop)
    signal.signal(signal.SIGTERM, request_stop)


def main(argv: list[str] | None = None):
    """Main entry point for the HTTP server."""
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))
    logger = logging.getLogger(__name__)

    stop_event = threading.Event()
    install_signal_handlers(stop_event)
    if args.stdin_quit:
        logger.info(f"Enter '{QUIT_COMMAND}' to shut down")
        threading.Thread(target=watch_stdin, args=(stop_event,), daemon=True).start()

    http_server = HTTPServer(logger, build_config(args))
    http_server.serve_forever(stop_event)


if __name__ == "__main__":
    main()
