"""Signal-aware output writing for the fuse CLI."""

import errno
import os
import types
from typing import Optional, Type, Union

from filefuse.cli.signal_handler import signal_handler

# Mode for output files created by -o
OUTPUT_FILE_MODE = 0o666


class SafeWriter:
    """Writes UTF-8 text to a file or file descriptor, stopping on interruption.

    Writing checks the shared signal handler first: once SIGPIPE or SIGINT has been
    received, or the reader has gone away (EPIPE), every write raises
    BrokenPipeError so the caller can stop producing output.

    A descriptor passed in stays open when the writer closes; a path is opened
    (created or truncated) by the writer and closed with it.

    Attributes:
        file: The file path or file descriptor given at construction.
        fd: The file descriptor being written to.
        owns_fd: Whether the writer opened ``fd`` and must close it.
        bytes_written: Total number of encoded bytes written so far.

    Example:
        >>> with SafeWriter("out.txt") as writer:  # doctest: +SKIP
        ...     writer.write("hello")
    """

    def __init__(self, file: Union[int, str, "os.PathLike[str]"]) -> None:
        """
        Args:
            file: A file descriptor, or a path that is created or truncated.

        Raises:
            TypeError: If file is neither an int nor path-like.
            OSError: If the output file cannot be opened.
        """
        if isinstance(file, int):
            fd, owns_fd = file, False
        elif isinstance(file, (str, os.PathLike)):
            fd = os.open(os.fspath(file), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, OUTPUT_FILE_MODE)
            owns_fd = True
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

        self.file = file
        self.fd = fd
        self.owns_fd = owns_fd
        self.bytes_written = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: str) -> None:
        """Write the whole string.

        Raises:
            BrokenPipeError: If a signal was received or the pipe is broken.
            OSError: If any other I/O error occurs.
            ValueError: If the writer is closed.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")
        if signal_handler.interrupted:
            raise BrokenPipeError()

        view = memoryview(data.encode("utf-8"))
        try:
            while view:
                written = os.write(self.fd, view)
                self.bytes_written += written
                view = view[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError() from e
            raise

    def close(self) -> None:
        """Release the descriptor if this writer opened it. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        if not self.owns_fd:
            return
        try:
            os.close(self.fd)
        except BrokenPipeError:
            pass

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        if exc_type is not None:
            # Keep the with block's exception; a failing close is secondary.
            try:
                self.close()
            except OSError:
                pass
        else:
            self.close()
