"""File content reading and formatting for the selected files.

This module reads each admitted file, rejects content that is not UTF-8 text, and
hands the decoded text to an output strategy. Binary files are never fatal: they
are reported with a warning and left out of the output.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from .binary_detector import decode_text
from .exceptions import BinaryFileError
from .output_strategies import OutputStrategy, create_output_strategy
from .types import PathType

logger = logging.getLogger(__name__)


class FileContentPrinter:
    """Formats the content of selected files with an output strategy.

    Attributes:
        output_strategy (OutputStrategy): Strategy used to format each file.
        line_numbers (bool): Whether file content is prefixed with line numbers.

    Example:
        >>> printer = FileContentPrinter("markdown")  # doctest: +SKIP
        >>> for block in printer.yield_formatted_files(["src/main.py"]):  # doctest: +SKIP
        ...     print(block)
        src/main.py
        ```python
        print("hello")
        ```
    """

    def __init__(self, output_format: Union[str, OutputStrategy] = "default", line_numbers: bool = False) -> None:
        """Initialize the FileContentPrinter.

        Args:
            output_format: Either a format name ("default", "markdown" or "xml") or an
                OutputStrategy instance.
            line_numbers: Whether to prefix content lines with their numbers.

        Raises:
            ValueError: If output_format names an unknown format.
            TypeError: If output_format is neither a string nor an OutputStrategy.
        """
        self.output_strategy = create_output_strategy(output_format)
        self.line_numbers = line_numbers

    @staticmethod
    def read_text(file_path: PathType) -> str:
        """Read a whole file and decode it as UTF-8 text.

        Raises:
            BinaryFileError: If the content looks binary or is not valid UTF-8.
            OSError: If the file cannot be read.
        """
        data = Path(file_path).read_bytes()
        text = decode_text(data)
        if text is None:
            raise BinaryFileError(str(file_path))
        return text

    def format_file(self, file_path: PathType) -> Optional[str]:
        """Format one file, or return None when it is binary.

        Raises:
            OSError: If the file cannot be read.
        """
        try:
            content = self.read_text(file_path)
        except BinaryFileError as e:
            logger.warning("Skipping binary file %s", e.file_path)
            return None
        return self.output_strategy.format_file(file_path, content, self.line_numbers)

    def yield_formatted_files(self, file_paths: Iterable[PathType]) -> Iterator[str]:
        """Yield the formatted block of every text file, in the given order."""
        for file_path in file_paths:
            formatted = self.format_file(file_path)
            if formatted is not None:
                yield formatted
