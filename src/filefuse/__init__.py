"""Select files under layered ignore rules and fuse them into one prompt.

This package walks one or more paths, decides which files are admitted
(extension filters, hidden-file suppression, cascading .gitignore rules and
user glob patterns), optionally renders a tree of the selection, and formats
the admitted files for consumption by Large Language Models (LLMs).
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("filefuse")
except PackageNotFoundError:
    __version__ = "unknown"
