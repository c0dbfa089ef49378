"""Markdown output strategy producing fenced code blocks."""

from pathlib import PurePath
from typing import Union

from filefuse.languages import get_language_for_extension
from filefuse.text_utils import add_line_numbers, determine_backtick_fence

from .base_strategy import OutputStrategy


class MarkdownOutputStrategy(OutputStrategy):
    """Formats each file as its path followed by a fenced code block.

    The code block is tagged with a language derived from the file extension, and
    its fence is made longer than any run of backticks inside the content so that
    the block can never be closed early.

    Example:
        >>> strategy = MarkdownOutputStrategy()
        >>> print(strategy.format_file("main.py", "print('hi')"))
        main.py
        ```python
        print('hi')
        ```
        >>> print(strategy.format_table_of_contents("└── src/"))
        # Table of Contents
        <BLANKLINE>
        ```
        └── src/
        ```
    """

    def format_file(self, path: Union[str, PurePath], content: str, line_numbers: bool = False) -> str:
        extension = PurePath(path).suffix[1:]
        language = get_language_for_extension(extension)
        if line_numbers:
            content = add_line_numbers(content)
        fence = determine_backtick_fence(content)
        return f"{path}\n{fence}{language}\n{content}\n{fence}"

    def format_table_of_contents(self, toc: str) -> str:
        return f"# Table of Contents\n\n```\n{toc}\n```"
