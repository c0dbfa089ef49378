"""XML output strategy for file content formatting.

This module provides a strategy that wraps every file in a numbered ``<document>``
element inside a single ``<documents>`` root, the layout commonly used for long
context prompts.
"""

from pathlib import PurePath
from typing import Union

from filefuse.text_utils import add_line_numbers

from .base_strategy import OutputStrategy


class XMLOutputStrategy(OutputStrategy):
    """Output strategy that formats file content as XML documents.

    Each file becomes::

        <document index="N">
        <source>relative/path/to/file</source>
        <document_content>
        file content...
        </document_content>
        </document>

    Documents are numbered from 1 in the order they are formatted, so the index
    counts formatted files only; a file skipped before formatting does not consume
    an index. Content is emitted verbatim without entity escaping, which keeps
    source code readable for a language model at the cost of the output not always
    being well-formed XML.

    Example:
        >>> strategy = XMLOutputStrategy()
        >>> print(strategy.start_output())
        <documents>
        >>> print(strategy.format_file("example.py", 'print("Hello")'))
        <document index="1">
        <source>example.py</source>
        <document_content>
        print("Hello")
        </document_content>
        </document>
        >>> strategy.format_file("second.py", "").splitlines()[0]
        '<document index="2">'
        >>> print(strategy.end_output())
        </documents>
    """

    def __init__(self) -> None:
        """Initialize the XML output strategy with the document counter at 1."""
        self._index = 1

    def format_file(self, path: Union[str, PurePath], content: str, line_numbers: bool = False) -> str:
        """Format one file as a numbered document element.

        Args:
            path: The path shown in the ``<source>`` element.
            content: The file content.
            line_numbers: Whether to prefix each line with its line number.

        Returns:
            The ``<document>`` element, without a trailing newline.
        """
        if line_numbers:
            content = add_line_numbers(content)
        output = (
            f'<document index="{self._index}">\n'
            f"<source>{path}</source>\n"
            f"<document_content>\n{content}\n</document_content>\n"
            f"</document>"
        )
        self._index += 1
        return output

    def format_table_of_contents(self, toc: str) -> str:
        """Wrap the rendered tree in a ``<table_of_contents>`` element.

        Example:
            >>> print(XMLOutputStrategy().format_table_of_contents("└── src/"))
            <table_of_contents>
            └── src/
            </table_of_contents>
        """
        return f"<table_of_contents>\n{toc}\n</table_of_contents>"

    def start_output(self) -> str:
        return "<documents>"

    def end_output(self) -> str:
        return "</documents>"
