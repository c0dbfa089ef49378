from typing import Union

from .base_strategy import OutputStrategy
from .default_strategy import DefaultOutputStrategy
from .markdown_strategy import MarkdownOutputStrategy
from .xml_strategy import XMLOutputStrategy

OUTPUT_FORMATS = ("default", "markdown", "xml")


def create_output_strategy(output_format: Union[str, OutputStrategy] = "default") -> OutputStrategy:
    """Resolve a format name (or pass through a strategy instance).

    Raises:
        ValueError: If the format name is not one of OUTPUT_FORMATS.
        TypeError: If output_format is neither a string nor an OutputStrategy.

    Example:
        >>> type(create_output_strategy("xml")).__name__
        'XMLOutputStrategy'
    """
    if isinstance(output_format, OutputStrategy):
        return output_format
    if not isinstance(output_format, str):
        raise TypeError("output_format must be either a format name or an OutputStrategy instance")
    name = output_format.lower()
    if name == "default":
        return DefaultOutputStrategy()
    if name == "markdown":
        return MarkdownOutputStrategy()
    if name == "xml":
        return XMLOutputStrategy()
    raise ValueError(f"Unsupported output format: {output_format}. Must be one of: {', '.join(OUTPUT_FORMATS)}")


__all__ = [
    "OUTPUT_FORMATS",
    "DefaultOutputStrategy",
    "MarkdownOutputStrategy",
    "OutputStrategy",
    "XMLOutputStrategy",
    "create_output_strategy",
]
