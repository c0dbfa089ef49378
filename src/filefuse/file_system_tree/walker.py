"""Single-pass traversal applying the selection policy at every entry.

The walker visits a root once, in deterministic lexicographic order, asking the
:class:`~filefuse.selection_policy.SelectionPolicy` whether to descend into each
directory and whether to emit each file. The same decisions feed an optional
:class:`~filefuse.file_system_tree.tree_builder.TreeBuilder`, so the table of
contents never needs a second scan.
"""

import logging
import os
from pathlib import Path, PurePath
from typing import Any, Callable, Iterator, List, Optional, Tuple

from filefuse.exceptions import TraversalError
from filefuse.exclusion_rules.git_rules import GitIgnoreChain
from filefuse.file_system_tree.error_action import ErrorAction
from filefuse.file_system_tree.tree_builder import TreeBuilder
from filefuse.selection_policy import SelectionPolicy
from filefuse.types import FileType, PathType

logger = logging.getLogger(__name__)

# Returned by Walker._guard when a failed read was tolerated.
_SKIPPED = object()


class Walker:
    """Traverses directory roots and yields the admitted files.

    Symbolic links below a root are never followed, emitted, or added to the tree,
    which guarantees termination on cyclic link structures. Sockets, FIFOs and
    device files are skipped as well. The root itself is always structural: it is
    never checked against file or directory admission rules.

    A root that is a file bypasses traversal and is emitted when it passes the
    extension and hidden-file checks; ignore patterns and gitignore rules do not
    apply to files named explicitly.

    Attributes:
        policy (SelectionPolicy): The admission rules.
        error_action (ErrorAction): What to do when a directory or ignore file
            cannot be read. RAISE aborts the walk with a TraversalError.

    Example:
        >>> walker = Walker(SelectionPolicy())  # doctest: +SKIP
        >>> builder = TreeBuilder("src")  # doctest: +SKIP
        >>> walker.walk("src", builder)  # doctest: +SKIP
        [PosixPath('src/main.py'), PosixPath('src/utils/helpers.py')]
    """

    def __init__(self, policy: SelectionPolicy, error_action: ErrorAction = ErrorAction.RAISE) -> None:
        self.policy = policy
        self.error_action = ErrorAction(error_action)

    def walk(self, root: PathType, builder: Optional[TreeBuilder] = None) -> List[Path]:
        """Walk one root and return the admitted file paths in traversal order.

        Args:
            root: A directory or file path.
            builder: Tree to populate with every admitted file and every directory
                entered. For a file root, the builder's root is the file itself.

        Raises:
            TraversalError: If an entry cannot be read and error_action is RAISE.
        """
        return list(self.iter_files(root, builder))

    def iter_files(self, root: PathType, builder: Optional[TreeBuilder] = None) -> Iterator[Path]:
        """Lazily yield the admitted file paths of one root."""
        root_path = Path(root)
        if root_path.is_file():
            if self.policy.should_admit_explicit_file(root_path):
                yield root_path
            else:
                logger.debug("Rejected explicit file %s", root_path)
            return

        gitignore = self._guard(root_path, self.policy.gitignore_for_root, root_path)
        if gitignore is _SKIPPED:
            return
        yield from self._walk_directory(root_path, PurePath(), gitignore, builder)

    def _walk_directory(
        self,
        directory: Path,
        relative: PurePath,
        gitignore: Optional[GitIgnoreChain],
        builder: Optional[TreeBuilder],
    ) -> Iterator[Path]:
        if gitignore is not None:
            gitignore = self._guard(directory, gitignore.descend, directory)
            if gitignore is _SKIPPED:
                return

        entries = self._guard(directory, self._list_directory, directory)
        if entries is _SKIPPED:
            return

        for name, kind in entries:
            path = directory / name
            child_relative = relative / name
            if kind == FileType.DIRECTORY:
                if not self.policy.should_admit_dir(path, child_relative, gitignore):
                    continue
                if builder is not None:
                    builder.insert(child_relative, is_file=False)
                yield from self._walk_directory(path, child_relative, gitignore, builder)
            elif kind == FileType.FILE:
                if not self.policy.should_admit_file(path, child_relative, gitignore):
                    continue
                if builder is not None:
                    builder.insert(child_relative, is_file=True)
                yield path
            else:
                logger.debug("Skipping %s entry %s", kind.value, path)

    @staticmethod
    def _list_directory(directory: Path) -> List[Tuple[str, FileType]]:
        """List a directory as (name, type) pairs sorted by name."""
        entries = []
        with os.scandir(directory) as it:
            for entry in it:
                if entry.is_symlink():
                    kind = FileType.SYMLINK
                elif entry.is_dir(follow_symlinks=False):
                    kind = FileType.DIRECTORY
                elif entry.is_file(follow_symlinks=False):
                    kind = FileType.FILE
                else:
                    kind = FileType.OTHER
                entries.append((entry.name, kind))
        entries.sort(key=lambda item: item[0])
        return entries

    def _guard(self, path: Path, operation: Callable[..., Any], *args: Any) -> Any:
        """Run a read operation under the configured error action.

        Returns the operation's result, or _SKIPPED when the failure was tolerated.
        """
        try:
            return operation(*args)
        except (OSError, TraversalError) as e:
            failure = e if isinstance(e, TraversalError) else TraversalError(str(path), e)
            if self.error_action == ErrorAction.RAISE:
                if failure is e:
                    raise
                raise failure from e

        if self.error_action == ErrorAction.WARN:
            logger.warning("Skipping unreadable %s: %s", path, failure.error)
        else:
            logger.debug("Skipping unreadable %s: %s", path, failure.error)
        return _SKIPPED
