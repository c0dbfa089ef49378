"""User-supplied ignore patterns with file/directory scoping.

Gitignore semantics are handled separately by the layered rules in
:mod:`filefuse.exclusion_rules.git_rules`; this module only covers the extra
``--ignore`` patterns given on the command line.
"""

import logging
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Iterable, List, Optional, Pattern, Tuple, Union

from .base_rules import BaseExclusionRules
from .glob_translate import compile_glob

logger = logging.getLogger(__name__)


def normalise_path(path: Union[str, PurePath]) -> str:
    """Join the segments of a path with forward slashes.

    Example:
        >>> normalise_path("./src/lib.rs")
        'src/lib.rs'
    """
    return PurePath(path).as_posix()


@dataclass(frozen=True)
class IgnorePattern:
    """One compiled ignore glob.

    Attributes:
        original: The pattern text as given, stripped of surrounding whitespace.
        directory_only: True when the pattern ends with ``/``; such a pattern never
            matches a file.
    """

    original: str
    directory_only: bool
    _regex: Pattern[str] = field(repr=False, compare=False)

    def _glob_matches(self, candidate: str) -> bool:
        return self._regex.fullmatch(candidate) is not None

    def matches(self, path: Union[str, PurePath], is_file: bool) -> bool:
        """Check the pattern against a path.

        The final segment is tried on its own so ``*.log`` matches at any depth, then the
        whole path so patterns containing ``/`` anchor against it. Directories are also
        tried with a trailing slash, which lets ``build/`` match a bare ``build``.

        Args:
            path: Path relative to the traversal root.
            is_file: Whether the path names a file.

        Example:
            >>> pattern = compile_pattern("build/")
            >>> pattern.matches("build", is_file=False), pattern.matches("build", is_file=True)
            (True, False)
        """
        if self.directory_only and is_file:
            return False

        pure = PurePath(path)
        name = pure.name
        if name:
            if self._glob_matches(name):
                return True
            if not is_file and self._glob_matches(name + "/"):
                return True

        normalised = normalise_path(pure)
        if self._glob_matches(normalised):
            return True

        if not is_file:
            if self._glob_matches(normalised.rstrip("/") + "/"):
                return True
            if self.directory_only:
                target = self.original.rstrip("/")
                if normalised == target or normalised.startswith(target + "/"):
                    return True

        return False


def compile_pattern(pattern: str) -> Optional[IgnorePattern]:
    """Compile one raw pattern.

    Returns None for empty or whitespace-only input, which is never matched.

    Raises:
        PatternError: If the glob syntax is invalid.
    """
    trimmed = pattern.strip()
    if not trimmed:
        return None
    return IgnorePattern(original=trimmed, directory_only=trimmed.endswith("/"), _regex=compile_glob(trimmed))


class CustomPatternRules(BaseExclusionRules):
    """Exclusion rules built from ``--ignore`` glob patterns.

    A path is excluded when any pattern matches it. With ``files_only`` set, the
    patterns never apply to directories, so every directory is still traversed and
    only the files inside are filtered.

    Attributes:
        files_only (bool): Restrict the patterns to files.

    Example:
        >>> rules = CustomPatternRules(["*.log", "temp*"])
        >>> rules.exclude("debug.log"), rules.exclude("temp_data.txt"), rules.exclude("keep.txt")
        (True, True, False)
        >>> CustomPatternRules(["build/"], files_only=True).exclude("build", is_dir=True)
        False
    """

    def __init__(self, patterns: Iterable[str] = (), files_only: bool = False) -> None:
        """Compile all patterns up front.

        Raises:
            PatternError: If any pattern has invalid glob syntax.
        """
        self.files_only = files_only
        self._patterns: List[IgnorePattern] = []
        for pattern in patterns:
            self.add_rule(pattern)

    @property
    def patterns(self) -> Tuple[IgnorePattern, ...]:
        return tuple(self._patterns)

    def has_rules(self) -> bool:
        return bool(self._patterns)

    def add_rule(self, rule: str) -> None:
        """Compile and append a single pattern; blank input is skipped."""
        compiled = compile_pattern(rule)
        if compiled is None:
            logger.debug("Skipping blank ignore pattern %r", rule)
            return
        self._patterns.append(compiled)

    def exclude(self, path: str, is_dir: bool = False) -> bool:
        if not self._patterns:
            return False
        if is_dir and self.files_only:
            return False
        return any(pattern.matches(path, is_file=not is_dir) for pattern in self._patterns)

    def exclude_file(self, path: Union[str, PurePath]) -> bool:
        return self.exclude(str(path), is_dir=False)

    def exclude_dir(self, path: Union[str, PurePath]) -> bool:
        return self.exclude(str(path), is_dir=True)
