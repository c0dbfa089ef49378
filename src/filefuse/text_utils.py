"""Small text helpers shared by the output strategies."""


def add_line_numbers(content: str) -> str:
    """Prefix each line with its 1-based number, right-aligned to a common width.

    Example:
        >>> print(add_line_numbers("alpha\\nbeta"))
        1  alpha
        2  beta
        >>> add_line_numbers("")
        ''
    """
    lines = content.splitlines()
    width = len(str(len(lines)))
    return "\n".join(f"{number:>{width}}  {line}" for number, line in enumerate(lines, start=1))


def determine_backtick_fence(content: str) -> str:
    """Shortest run of three or more backticks that does not occur in the content.

    Example:
        >>> determine_backtick_fence("plain text")
        '```'
        >>> determine_backtick_fence("code with ``` and ```` in it")
        '`````'
    """
    fence = "```"
    while fence in content:
        fence += "`"
    return fence
