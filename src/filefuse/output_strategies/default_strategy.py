"""Plain text output strategy."""

from pathlib import PurePath
from typing import Union

from filefuse.text_utils import add_line_numbers

from .base_strategy import OutputStrategy


class DefaultOutputStrategy(OutputStrategy):
    """Formats each file as its path, a separator line, and its content.

    Example:
        >>> strategy = DefaultOutputStrategy()
        >>> print(strategy.format_file("test.txt", "Hello, world!"))
        test.txt
        ---
        Hello, world!
        <BLANKLINE>
        ---
        >>> print(strategy.format_file("test.txt", "line 1\\nline 2", line_numbers=True))
        test.txt
        ---
        1  line 1
        2  line 2
        <BLANKLINE>
        ---
    """

    def format_file(self, path: Union[str, PurePath], content: str, line_numbers: bool = False) -> str:
        if line_numbers:
            content = add_line_numbers(content)
        return f"{path}\n---\n{content}\n\n---"

    def format_table_of_contents(self, toc: str) -> str:
        return toc
