"""Per-entry admission decisions for files and directories.

The policy aggregates every filter source into two questions the walker asks for
each entry it meets: may this file be emitted, and may this directory be entered.
Rejecting a directory prunes it, so nothing beneath it is ever read.
"""

import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional, Tuple, Union

from filefuse.exclusion_rules.git_rules import GitIgnoreChain
from filefuse.exclusion_rules.pattern_rules import CustomPatternRules
from filefuse.types import PathType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionConfig:
    """Snapshot of the selection options for one invocation.

    Attributes:
        extensions: Allow-list of file extensions, each optionally dot-prefixed.
            Empty means no extension filter.
        include_hidden: Admit entries whose name starts with a dot.
        respect_gitignore: Apply .gitignore/.ignore rules at every depth.
        ignore_patterns: Raw glob strings supplied by the user.
        ignore_files_only: Apply ``ignore_patterns`` to files only, never to directories.
        read_parent_ignores: Also read ignore files above a directory root, up to the
            repository root, and the repository's ``.git/info/exclude``.
        read_global_ignores: Also read the user's global ignore file.
    """

    extensions: Tuple[str, ...] = ()
    include_hidden: bool = False
    respect_gitignore: bool = True
    ignore_patterns: Tuple[str, ...] = ()
    ignore_files_only: bool = False
    read_parent_ignores: bool = True
    read_global_ignores: bool = True


def _extension_of(path: Union[str, PurePath]) -> str:
    suffix = PurePath(path).suffix
    return suffix[1:] if suffix else ""


def is_hidden(path: Union[str, PurePath]) -> bool:
    """Whether the entry's own name starts with a dot.

    Example:
        >>> is_hidden("src/.env"), is_hidden(".config/settings.toml")
        (True, False)
    """
    return PurePath(path).name.startswith(".")


class SelectionPolicy:
    """Admit/reject decisions combining all filter sources.

    The policy owns the compiled custom patterns; it is built once per invocation
    and shared by every walk. Gitignore rules depend on where the walk currently is,
    so the walker passes the :class:`GitIgnoreChain` in effect for the entry.

    Args:
        config: The selection options. Defaults to no filtering beyond hidden files
            and gitignore rules.

    Raises:
        PatternError: If any ignore pattern has invalid glob syntax.

    Example:
        >>> policy = SelectionPolicy(SelectionConfig(extensions=(".py",), ignore_patterns=("test_*",)))
        >>> policy.should_admit_file("src/app.py")
        True
        >>> policy.should_admit_file("src/app.txt"), policy.should_admit_file("test_app.py")
        (False, False)
        >>> policy.should_admit_dir("src/tests"), policy.should_admit_dir(".git")
        (True, False)
    """

    def __init__(self, config: Optional[SelectionConfig] = None) -> None:
        self.config = config if config is not None else SelectionConfig()
        self.custom_rules = CustomPatternRules(self.config.ignore_patterns, files_only=self.config.ignore_files_only)
        self._extensions = frozenset(ext[1:] if ext.startswith(".") else ext for ext in self.config.extensions)

    @property
    def respects_gitignore(self) -> bool:
        return self.config.respect_gitignore

    def matches_extension(self, path: Union[str, PurePath]) -> bool:
        """Whether the file passes the extension allow-list (case-sensitive)."""
        if not self.config.extensions:
            return True
        extension = _extension_of(path)
        return bool(extension) and extension in self._extensions

    def gitignore_for_root(self, root: PathType) -> Optional[GitIgnoreChain]:
        """Gitignore chain in effect at a directory root, or None when rules are off.

        Raises:
            TraversalError: If an ignore file above the root cannot be read.
        """
        if not self.config.respect_gitignore:
            return None
        return GitIgnoreChain.for_root(
            root,
            read_parent_ignores=self.config.read_parent_ignores,
            read_global_ignores=self.config.read_global_ignores,
        )

    def should_admit_explicit_file(self, path: Union[str, PurePath]) -> bool:
        """Admission for a file named directly as an input path.

        Only the extension filter and the hidden-file rule apply; custom patterns and
        gitignore rules are not consulted for files the user named explicitly.
        """
        if not self.matches_extension(path):
            return False
        if not self.config.include_hidden and is_hidden(path):
            return False
        return True

    def should_admit_file(
        self,
        path: Union[str, PurePath],
        relative_path: Optional[Union[str, PurePath]] = None,
        gitignore: Optional[GitIgnoreChain] = None,
    ) -> bool:
        """Admission for a file met during a directory walk.

        Args:
            path: The file's path as walked.
            relative_path: Path relative to the traversal root, used for custom
                patterns. Defaults to ``path``.
            gitignore: Rules in effect for the file's directory.
        """
        if not self.matches_extension(path):
            logger.debug("Rejected %s: extension not in allow-list", path)
            return False
        if not self.config.include_hidden and is_hidden(path):
            logger.debug("Rejected %s: hidden file", path)
            return False
        if self.custom_rules.exclude_file(relative_path if relative_path is not None else path):
            logger.debug("Rejected %s: matches an ignore pattern", path)
            return False
        if self.config.respect_gitignore and gitignore is not None and gitignore.exclude(path, is_dir=False):
            logger.debug("Rejected %s: excluded by gitignore rules", path)
            return False
        return True

    def should_admit_dir(
        self,
        path: Union[str, PurePath],
        relative_path: Optional[Union[str, PurePath]] = None,
        gitignore: Optional[GitIgnoreChain] = None,
    ) -> bool:
        """Admission for a directory met during a walk; False prunes its subtree.

        Extension filters never prune directories.
        """
        if not self.config.include_hidden and is_hidden(path):
            logger.debug("Pruned %s: hidden directory", path)
            return False
        if self.custom_rules.exclude_dir(relative_path if relative_path is not None else path):
            logger.debug("Pruned %s: matches an ignore pattern", path)
            return False
        if self.config.respect_gitignore and gitignore is not None and gitignore.exclude(path, is_dir=True):
            logger.debug("Pruned %s: excluded by gitignore rules", path)
            return False
        return True
