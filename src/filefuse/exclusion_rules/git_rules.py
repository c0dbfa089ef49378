"""Implementation of exclusion rules using .gitignore pattern syntax.

One :class:`GitIgnoreExclusionRules` object is a single rule layer: the patterns of
the ignore files found in one directory, matched against paths relative to that
directory. :class:`GitIgnoreChain` stacks layers from the traversal root (and its
repository ancestors) down to the directory currently being walked.
"""

import configparser
import logging
import os
from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from filefuse.exceptions import TraversalError
from filefuse.types import PathType

from .base_rules import BaseExclusionRules

logger = logging.getLogger(__name__)

# Per-directory ignore files, read in this order within a layer.
IGNORE_FILE_NAMES = (".gitignore", ".ignore")


class GitIgnoreExclusionRules(BaseExclusionRules):
    """One layer of .gitignore patterns anchored at a base directory.

    This class implements the BaseExclusionRules interface using standard .gitignore
    pattern matching. It uses the pathspec library to match paths against patterns in
    the same way that Git does, including negation *within* the layer.

    Paths given to :meth:`exclude` are relative to the layer's base directory and use
    forward slashes. :meth:`exclude_path` accepts any path and relativises it first;
    paths outside the base directory are never excluded by the layer.

    Attributes:
        base_dir (Path): Absolute directory the patterns are anchored at.
        spec (PathSpec): Compiled pattern matcher from the pathspec library.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("*.pyc")
        >>> rules.add_rule("build/")
        >>> rules.exclude("pkg/module.pyc")
        True
        >>> rules.exclude("build", is_dir=True)
        True
        >>> rules.exclude("build", is_dir=False)
        False
    """

    def __init__(
        self,
        rules_files: Optional[Union[PathType, Sequence[PathType]]] = None,
        base_dir: Optional[PathType] = None,
    ):
        """Initialize a layer with patterns from the specified files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.
            base_dir: Directory the patterns are relative to. Defaults to the current
                working directory.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self.base_dir = Path(os.path.abspath(base_dir if base_dir is not None else os.curdir))
        self.sources: List[Path] = []
        self.spec = PathSpec.from_lines(GitWildMatchPattern, [])

        if rules_files is not None:
            self.load_rules(rules_files)

    @classmethod
    def from_directory(cls, directory: PathType) -> Optional["GitIgnoreExclusionRules"]:
        """Build the layer for one directory from its ignore files.

        Returns:
            The layer, or None when the directory holds no ignore file.

        Raises:
            TraversalError: If an ignore file exists but cannot be read.
        """
        directory = Path(directory)
        found = [directory / name for name in IGNORE_FILE_NAMES if (directory / name).is_file()]
        if not found:
            return None
        layer = cls(base_dir=directory)
        layer.load_rules(found)
        return layer

    def has_rules(self) -> bool:
        return len(self.spec.patterns) > 0

    def exclude(self, path: str, is_dir: bool = False) -> bool:
        """Check a path relative to the base directory against this layer.

        Directories are matched with a trailing slash so that directory-only
        patterns such as ``node_modules/`` apply to them.
        """
        if is_dir and not path.endswith("/"):
            path += "/"
        return bool(self.spec.match_file(path))

    def exclude_path(self, path: PathType, is_dir: bool = False) -> bool:
        """Check an arbitrary path, relativising it against the base directory."""
        absolute = os.path.abspath(path)
        try:
            relative = Path(absolute).relative_to(self.base_dir)
        except ValueError:
            return False
        if not relative.parts:
            return False
        return self.exclude(relative.as_posix(), is_dir=is_dir)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the patterns of one or more files to this layer.

        Raises:
            FileNotFoundError: If any rules file does not exist.
            TraversalError: If a rules file exists but cannot be read.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")
            try:
                with open(path, "r", encoding="utf-8", errors="replace") as f:
                    lines = f.read().splitlines()
            except OSError as e:
                raise TraversalError(str(path), e) from e

            self._extend(PathSpec.from_lines(GitWildMatchPattern, lines).patterns)
            self.sources.append(path)
            logger.debug("Loaded %d ignore rules from %s", len(lines), path)

    def add_rule(self, rule: str) -> None:
        """Add a single .gitignore pattern to this layer."""
        self._extend([GitWildMatchPattern(rule)])

    def _extend(self, patterns: Sequence[GitWildMatchPattern]) -> None:
        # PathSpec may hold its patterns in an immutable sequence
        if not hasattr(self.spec.patterns, "extend"):
            self.spec.patterns = list(self.spec.patterns)
        self.spec.patterns.extend(patterns)


def find_repository_root(directory: PathType) -> Optional[Path]:
    """Return the nearest ancestor (or the directory itself) holding a ``.git`` entry."""
    current = Path(os.path.abspath(directory))
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


def find_global_ignore_file() -> Optional[Path]:
    """Locate the user's global ignore file the way Git does.

    ``core.excludesFile`` from ``~/.gitconfig`` wins; otherwise
    ``$XDG_CONFIG_HOME/git/ignore`` (defaulting to ``~/.config/git/ignore``).
    """
    home = Path(os.path.expanduser("~"))
    gitconfig = home / ".gitconfig"
    if gitconfig.is_file():
        parser = configparser.ConfigParser(strict=False, interpolation=None)
        try:
            parser.read(gitconfig, encoding="utf-8")
        except (configparser.Error, UnicodeDecodeError) as e:
            logger.debug("Could not parse %s: %s", gitconfig, e)
        else:
            configured = parser.get("core", "excludesfile", fallback=None)
            if configured:
                path = Path(os.path.expanduser(configured.strip().strip('"')))
                return path if path.is_file() else None

    config_home = os.environ.get("XDG_CONFIG_HOME") or str(home / ".config")
    default = Path(config_home) / "git" / "ignore"
    return default if default.is_file() else None


class GitIgnoreChain:
    """Immutable stack of .gitignore layers from the traversal root downwards.

    Each directory visited during a walk gets its own chain: the parent's layers plus
    the layer built from the directory's own ignore files. Rules from a directory
    therefore apply to it and its descendants, never to siblings or ancestors. A path
    is excluded when any layer in the chain excludes it; a deeper layer cannot
    re-include what a shallower one excluded.

    Example:
        >>> chain = GitIgnoreChain()
        >>> chain.exclude("anything.txt")
        False
        >>> len(chain)
        0
    """

    def __init__(self, layers: Sequence[GitIgnoreExclusionRules] = ()) -> None:
        self._layers: Tuple[GitIgnoreExclusionRules, ...] = tuple(layers)

    def __len__(self) -> int:
        return len(self._layers)

    @property
    def layers(self) -> Tuple[GitIgnoreExclusionRules, ...]:
        return self._layers

    @classmethod
    def for_root(
        cls,
        root: PathType,
        read_parent_ignores: bool = True,
        read_global_ignores: bool = True,
    ) -> "GitIgnoreChain":
        """Build the chain in effect at a traversal root, before its own ignore files.

        Collects, outermost first: the global ignore file, the repository's
        ``.git/info/exclude``, and the ignore files of every ancestor of ``root`` up to
        the repository root (or the filesystem root outside a repository). The root's
        own ignore files are added by :meth:`descend`.

        Raises:
            TraversalError: If an ignore file exists but cannot be read.
        """
        root_path = Path(os.path.abspath(root))
        repository = find_repository_root(root_path)
        anchor = repository if repository is not None else root_path
        layers: List[GitIgnoreExclusionRules] = []

        if read_global_ignores:
            global_file = find_global_ignore_file()
            if global_file is not None:
                layers.append(GitIgnoreExclusionRules(global_file, base_dir=anchor))

        if read_parent_ignores:
            if repository is not None:
                exclude_file = repository / ".git" / "info" / "exclude"
                if exclude_file.is_file():
                    layers.append(GitIgnoreExclusionRules(exclude_file, base_dir=repository))

            ancestors = []
            for parent in root_path.parents:
                ancestors.append(parent)
                if parent == repository:
                    break
            if repository is None or repository != root_path:
                for parent in reversed(ancestors):
                    layer = GitIgnoreExclusionRules.from_directory(parent)
                    if layer is not None:
                        layers.append(layer)

        return cls(layers)

    def descend(self, directory: PathType) -> "GitIgnoreChain":
        """Return the chain for ``directory``: these layers plus its own ignore files.

        Raises:
            TraversalError: If an ignore file in ``directory`` cannot be read.
        """
        layer = GitIgnoreExclusionRules.from_directory(directory)
        if layer is None:
            return self
        return GitIgnoreChain(self._layers + (layer,))

    def exclude(self, path: PathType, is_dir: bool = False) -> bool:
        return any(layer.exclude_path(path, is_dir=is_dir) for layer in self._layers)
