"""Error action enum for handling unreadable entries during directory traversal."""

from enum import Enum


class ErrorAction(str, Enum):
    """Action to take when a directory or ignore file cannot be read during a walk.

    Values:
        RAISE: Abort the walk for the affected root with a TraversalError (default)
        WARN: Skip the unreadable subtree and log a warning
        IGNORE: Skip the unreadable subtree, logging only at debug level
    """

    RAISE = "raise"
    WARN = "warn"
    IGNORE = "ignore"
