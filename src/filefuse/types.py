from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class FileType(Enum):
    """Enumeration of entry types met during traversal.

    Only regular files and directories take part in selection; symlinks and other
    entries (sockets, FIFOs, devices) are skipped.

    Attributes:
        FILE: Regular file
        DIRECTORY: Directory
        SYMLINK: Symbolic link
        OTHER: Any other entry type
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


class TocMode(str, Enum):
    """Rendering policy for the table of contents tree.

    Attributes:
        AUTO: Show files only when the estimated rendering stays below the
            auto-detection threshold, otherwise show directories only.
        DIRS_ONLY: Never show files.
        FILES_AND_DIRS: Always show files and directories.
    """

    AUTO = "auto"
    DIRS_ONLY = "dirs-only"
    FILES_AND_DIRS = "files-and-dirs"
