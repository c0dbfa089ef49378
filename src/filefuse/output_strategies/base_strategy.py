"""Output strategy base class defining the interface for file content formatting.

This module provides the abstract base class that defines how selected files and the
table of contents are rendered into the final prompt text. The core never formats
content itself; it hands each admitted file to a strategy in traversal order.
"""

from abc import ABC, abstractmethod
from pathlib import PurePath
from typing import Union


class OutputStrategy(ABC):
    """Abstract base class for output formatting strategies.

    The output of one invocation is assembled from four kinds of parts:

    1. Start - an opening wrapper (may be empty)
    2. Table of contents - the rendered tree, when one was requested
    3. Files - one formatted block per file, in traversal order
    4. End - a closing wrapper (may be empty)

    Empty parts are dropped and the remaining parts are joined with newlines.
    Strategies may keep state between calls (the XML strategy numbers its documents),
    so a fresh instance should be used for every output.

    Example:
        >>> class UpperStrategy(OutputStrategy):
        ...     def format_file(self, path, content, line_numbers=False):
        ...         return f"{path}: {content.upper()}"
        ...
        ...     def format_table_of_contents(self, toc):
        ...         return toc
        >>> UpperStrategy().format_file("a.txt", "hi")
        'a.txt: HI'
        >>> UpperStrategy().start_output()
        ''
    """

    @abstractmethod
    def format_file(self, path: Union[str, PurePath], content: str, line_numbers: bool = False) -> str:
        """Format one file's content.

        Args:
            path: The path of the file as it should be displayed.
            content: The decoded text content of the file.
            line_numbers: Whether to prefix each content line with its line number.

        Returns:
            The formatted block for this file, without a trailing newline.
        """
        pass

    @abstractmethod
    def format_table_of_contents(self, toc: str) -> str:
        """Wrap a rendered directory tree.

        Args:
            toc: The rendered tree text, non-empty.

        Returns:
            The formatted table of contents.
        """
        pass

    def start_output(self) -> str:
        """Opening wrapper emitted before everything else, or an empty string."""
        return ""

    def end_output(self) -> str:
        """Closing wrapper emitted after the last file, or an empty string."""
        return ""
