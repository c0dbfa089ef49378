from typing import Optional


class PatternError(ValueError):
    """
    Exception raised when a user-supplied ignore pattern is not a valid glob.

    Patterns are compiled before any traversal begins, so this exception always
    surfaces before a single directory has been read.

    Attributes:
        pattern (str): The offending pattern text.
        reason (str): Description of what is wrong with the pattern.

    Example:
        >>> error = PatternError("src/[abc", "unterminated character class")
        >>> str(error)
        "Invalid ignore pattern 'src/[abc': unterminated character class"
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid ignore pattern '{pattern}': {reason}")


class TraversalError(Exception):
    """
    Exception raised when the walk cannot read a directory or an ignore file.

    The original ``OSError`` is kept both as the ``error`` attribute and as the
    exception's ``__cause__`` so callers can distinguish permission problems from
    entries that vanished mid-walk.

    Attributes:
        path (str): The path that could not be read.
        error (OSError): The underlying I/O failure.

    Example:
        >>> error = TraversalError("/srv/private", PermissionError(13, "Permission denied"))
        >>> str(error)
        'Cannot read /srv/private: [Errno 13] Permission denied'
        >>> error.is_permission_error
        True
    """

    def __init__(self, path: str, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Cannot read {path}: {error}")

    @property
    def is_permission_error(self) -> bool:
        """Whether the underlying failure was an access denial."""
        return isinstance(self.error, PermissionError)


class BinaryFileError(Exception):
    """
    Exception raised when a selected file turns out not to hold UTF-8 text.

    The content reader raises this for files containing NUL bytes, too many
    control bytes, or invalid UTF-8. It is never fatal: the caller skips the file
    with a warning.

    Attributes:
        file_path (str): Path to the binary file that was encountered.

    Example:
        >>> error = BinaryFileError("/path/to/binary.dat")
        >>> str(error)
        'Binary file detected: /path/to/binary.dat'
    """

    def __init__(self, file_path: str, detail: Optional[str] = None) -> None:
        """
        Initialize the exception with the path to the binary file.

        Args:
            file_path (str): Path to the binary file that was encountered.
            detail (str, optional): Why the content was rejected.
        """
        self.file_path = file_path
        self.detail = detail
        super().__init__(f"Binary file detected: {file_path}")
