"""Translation of shell-style glob patterns into regular expressions.

The dialect is the one users expect from ``--ignore``: ``*`` and ``?`` match any
character including the path separator, ``[...]`` is a character class (``[!...]``
negates it), and ``**`` is accepted only as a whole path component, where ``**/``
matches zero or more leading directories. Matching is case-sensitive.

Unlike :func:`fnmatch.translate`, malformed patterns are rejected instead of being
silently read as literals, so a typo in an ignore pattern is reported up front.
"""

import re
from typing import List, Pattern, Tuple

from filefuse.exceptions import PatternError


def _translate_class(pattern: str, start: int) -> Tuple[str, int]:
    """Translate the character class opening at ``start``; return (regex, next index)."""
    i = start + 1
    negate = False
    if i < len(pattern) and pattern[i] == "!":
        negate = True
        i += 1
    body_start = i
    # A closing bracket right after the opening one is a literal member.
    if i < len(pattern) and pattern[i] == "]":
        i += 1
    end = pattern.find("]", i)
    if end == -1:
        raise PatternError(pattern, f"unterminated character class at position {start}")

    body = pattern[body_start:end]
    for left, right in re.findall(r"(.)-(.)", body):
        if left > right:
            raise PatternError(pattern, f"invalid range '{left}-{right}' in character class")
    body = body.replace("\\", r"\\").replace("[", r"\[")
    if body.startswith("^"):
        body = "\\" + body
    return f"[{'^' if negate else ''}{body}]", end + 1


def translate_glob(pattern: str) -> str:
    """Translate a glob into a regular expression source string.

    Args:
        pattern: The glob text, already stripped of surrounding whitespace.

    Returns:
        A regular expression that must match the whole candidate string.

    Raises:
        PatternError: If the glob is malformed.

    Example:
        >>> import re
        >>> regex = re.compile(translate_glob("src/**/*.rs"))
        >>> bool(regex.fullmatch("src/lib.rs")), bool(regex.fullmatch("src/a/b/mod.rs"))
        (True, True)
        >>> translate_glob("a**")
        Traceback (most recent call last):
        ...
        filefuse.exceptions.PatternError: Invalid ignore pattern 'a**': recursive wildcards must form a single path component
    """
    parts: List[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]
        if pattern.startswith("***", i):
            raise PatternError(pattern, "wildcards are either regular `*` or recursive `**`")
        if pattern.startswith("**", i):
            if i > 0 and pattern[i - 1] != "/":
                raise PatternError(pattern, "recursive wildcards must form a single path component")
            if i + 2 < n and pattern[i + 2] != "/":
                raise PatternError(pattern, "recursive wildcards must form a single path component")
            if i + 2 < n:
                parts.append("(?:.*/)?")
                i += 3
            else:
                parts.append(".*")
                i += 2
        elif char == "*":
            parts.append(".*")
            i += 1
        elif char == "?":
            parts.append(".")
            i += 1
        elif char == "[":
            regex, i = _translate_class(pattern, i)
            parts.append(regex)
        else:
            parts.append(re.escape(char))
            i += 1
    return "(?s:" + "".join(parts) + ")"


def compile_glob(pattern: str) -> Pattern[str]:
    """Compile a glob into a regex object usable with ``fullmatch``."""
    return re.compile(translate_glob(pattern))
