from abc import ABC, abstractmethod
from typing import Sequence, Union

from filefuse.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for file/directory exclusion rules.

    Concrete rule sets decide, for a single path, whether it must be left out of the
    selection. The selection policy consults several rule sets (user glob patterns and
    one .gitignore layer per directory level) and rejects a path as soon as any of
    them excludes it.

    Unlike a plain glob, several rule types need to know whether the path names a
    directory: ``build/`` only ever excludes directories, and a directory exclusion
    prunes the whole subtree beneath it.

    Example:
        >>> from filefuse.exclusion_rules.pattern_rules import CustomPatternRules
        >>> rules = CustomPatternRules(["*.log", "build/"])
        >>> rules.exclude("debug.log")
        True
        >>> rules.exclude("build", is_dir=True)
        True
        >>> rules.exclude("build", is_dir=False)
        False
    """

    @abstractmethod
    def exclude(self, path: str, is_dir: bool = False) -> bool:
        """
        Determine if a given path should be excluded based on the loaded rules.

        Args:
            path (str): The file or directory path to check, using forward slashes.
                Rule types document what the path is expected to be relative to.
            is_dir (bool): Whether the path names a directory.

        Returns:
            bool: True if the path should be excluded, False if it should be included.
        """
        pass

    def has_rules(self) -> bool:
        """Whether this rule set can exclude anything at all."""
        return True

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load and parse exclusion rules from one or more files.

        Rule types that are not backed by files keep this default implementation.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
