"""File operations confined to a serving root."""

import os
import threading
from logging import Logger
from pathlib import Path

from minihttpd.exceptions import PathInvalidError, WriteError

PARENT_SEGMENT = ".."
PATH_SEPARATOR = "/"
DIRECTORY_MODE = 0o777
WRITE_LOCK_STRIPES = 64


class FileManager:
    """
    Read and write files under a base directory.

    Security features:
    - Rejects null bytes and ".." segments outright
    - Resolves symlinks and relative paths, then checks the result
      is still inside the base directory
    - Uses binary read/write so file bytes round-trip exactly

    Writes to the same resolved path are serialized through a fixed pool of
    locks picked by path hash; the last writer wins.
    """

    def __init__(self, base_directory: str, logger: Logger):
        """
        Initialize FileManager with a base directory.

        The directory does not have to exist yet; it is created on the
        first write. An empty string means the process working directory.

        Args:
            base_directory: Directory to confine all file operations
            logger: Logger instance for debug/error messages
        """
        self.base_dir = Path(base_directory or os.curdir).resolve()
        self.logger = logger
        self._write_locks = tuple(threading.Lock() for _ in range(WRITE_LOCK_STRIPES))

    def read_file(self, filename: str) -> bytes:
        """
        Read file as bytes with security validation.

        Args:
            filename: Relative filename within base directory

        Returns:
            File contents as bytes

        Raises:
            PathInvalidError: If the path escapes the base directory, or the
                file is missing, not a regular file, or unreadable
        """
        file_path = self._validate_path(filename)

        if not file_path.is_file():
            raise PathInvalidError(f"File not found: {filename}")

        self.logger.debug(f"Reading file: {file_path}")
        try:
            return file_path.read_bytes()
        except OSError as e:
            raise PathInvalidError(f"Cannot read {filename}: {e}") from e

    def is_servable(self, filename: str) -> bool:
        """
        Check whether a path may be served from this root.

        The path must name something below a subdirectory (it contains a
        "/"), so files sitting directly in the root are never exposed.

        Args:
            filename: Relative filename within base directory

        Returns:
            True if the path is contained, names a regular file and is readable
        """
        if PATH_SEPARATOR not in filename:
            return False
        try:
            file_path = self._validate_path(filename)
        except PathInvalidError:
            return False
        return file_path.is_file() and os.access(file_path, os.R_OK)

    def write_file(self, filename: str, content: bytes) -> None:
        """
        Write file as bytes with security validation, truncating any
        previous content.

        Args:
            filename: Relative filename within base directory
            content: File contents as bytes

        Raises:
            WriteError: If the base directory cannot be created, the path
                violates the containment policy, or the file cannot be written
        """
        try:
            self.base_dir.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise WriteError(f"Cannot create directory {self.base_dir}: {e}") from e

        try:
            file_path = self._validate_path(filename)
        except PathInvalidError as e:
            raise WriteError(str(e)) from e

        self.logger.debug(f"Writing {len(content)} bytes to: {file_path}")
        with self._lock_for(file_path):
            try:
                file_path.write_bytes(content)
            except OSError as e:
                self.logger.error(f"Error saving file {file_path}: {e}")
                raise WriteError(f"Cannot write {filename}: {e}") from e

    def _lock_for(self, file_path: Path) -> threading.Lock:
        return self._write_locks[hash(file_path) % len(self._write_locks)]

    def _validate_path(self, filename: str) -> Path:
        """
        Validate path prevents directory traversal attacks.

        Args:
            filename: Relative filename to validate

        Returns:
            Resolved absolute path within base_dir

        Raises:
            PathInvalidError: If path escapes base_dir or contains dangerous characters
        """
        if "\0" in filename:
            raise PathInvalidError("Null bytes in filename")

        if PARENT_SEGMENT in filename.split(PATH_SEPARATOR):
            raise PathInvalidError(f"Parent directory segment in path: {filename}")

        try:
            requested_path = (self.base_dir / filename).resolve()
        except (OSError, RuntimeError) as e:
            raise PathInvalidError(f"Cannot resolve {filename}: {e}") from e

        # Critical: Verify resolved path is still within base_dir
        try:
            requested_path.relative_to(self.base_dir)
        except ValueError:
            raise PathInvalidError(f"Path traversal attempt detected: {filename}")

        return requested_path
