"""File extension to language mapping for fenced code blocks."""

from typing import Dict

LANGUAGE_MAP: Dict[str, str] = {
    "py": "python",
    "c": "c",
    "cpp": "cpp",
    "java": "java",
    "js": "javascript",
    "ts": "typescript",
    "html": "html",
    "css": "css",
    "xml": "xml",
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
    "sh": "bash",
    "rb": "ruby",
}


def get_language_for_extension(extension: str) -> str:
    """Language name for an extension (without the dot), or an empty string.

    Example:
        >>> get_language_for_extension("yml")
        'yaml'
        >>> get_language_for_extension("rs")
        ''
    """
    return LANGUAGE_MAP.get(extension, "")
