"""Configuration defaults for the server."""

from dataclasses import dataclass

HOST: str = "localhost"
PORT: int = 4221
BUFFER_SIZE: int = 1024
MAX_REQUEST_LINE: int = 1024
READ_TIMEOUT: float | None = None  # seconds; None blocks until the client sends
ACCEPT_POLL_INTERVAL: float = 0.5
SHUTDOWN_GRACE_PERIOD: float = 5.0
DRAIN_TIMEOUT: float = 0.25  # seconds of silence before unread input is abandoned
DRAIN_LIMIT: int = 1_048_576
LOG_LEVEL: str = "INFO"


@dataclass(frozen=True)
class ServerConfig:
    files_directory: str = ""
    host: str = HOST
    port: int = PORT
    max_request_size: int = BUFFER_SIZE
    max_request_line: int = MAX_REQUEST_LINE
    read_timeout: float | None = READ_TIMEOUT
    drain_timeout: float = DRAIN_TIMEOUT
    drain_limit: int = DRAIN_LIMIT
    shutdown_grace_period: float = SHUTDOWN_GRACE_PERIOD
