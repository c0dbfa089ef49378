"""Concatenation of selected files into one prompt text.

This module ties the selection engine to the content collaborators: every root is
walked exactly once, and the same walk yields both the ordered file list and the
tree behind the table of contents.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Union

from filefuse.file_content_printer import FileContentPrinter
from filefuse.file_system_tree.error_action import ErrorAction
from filefuse.file_system_tree.tree_builder import TreeBuilder
from filefuse.file_system_tree.tree_node import TreeNode
from filefuse.file_system_tree.tree_renderer import TreeRenderer
from filefuse.file_system_tree.walker import Walker
from filefuse.output_strategies import OutputStrategy
from filefuse.selection_policy import SelectionConfig, SelectionPolicy
from filefuse.types import PathType, TocMode

logger = logging.getLogger(__name__)


@dataclass
class Selection:
    """Result of walking every root once.

    Attributes:
        files: Admitted files in traversal order, roots in input order.
        trees: One tree per root that produced one, in input order. A file root
            that was rejected produces no tree.
    """

    files: List[Path] = field(default_factory=list)
    trees: List[TreeNode] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.files)


class FileFuser:
    """Selects files under one or more roots and renders them as a single text.

    Selection happens once, on first use, and is cached. The output is made of
    parts (start marker, table of contents, files, end marker) joined by newlines;
    empty markers are left out, and a non-empty table of contents is followed by a
    blank part.

    Attributes:
        paths (List[Path]): Roots in input order.
        policy (SelectionPolicy): The admission rules.
        toc_mode (Optional[TocMode]): Table of contents rendering, or None for none.
        error_action (ErrorAction): Handling of unreadable directories and ignore files.

    Example:
        >>> fuser = FileFuser(["src"], selection=SelectionConfig(extensions=("py",)))  # doctest: +SKIP
        >>> [str(path) for path in fuser.select().files]  # doctest: +SKIP
        ['src/main.py', 'src/utils/helpers.py']
        >>> print(fuser.render())  # doctest: +SKIP
        src/main.py
        ---
        ...

    Raises:
        PatternError: If an ignore pattern in the selection config is invalid.
        ValueError: If the output format is not supported.
    """

    def __init__(
        self,
        paths: Sequence[PathType],
        *,
        selection: Union[SelectionConfig, SelectionPolicy, None] = None,
        toc_mode: Union[str, TocMode, None] = None,
        output_format: Union[str, OutputStrategy] = "default",
        line_numbers: bool = False,
        error_action: Union[str, ErrorAction] = ErrorAction.RAISE,
        renderer: Optional[TreeRenderer] = None,
    ) -> None:
        self.paths = [Path(path) for path in paths]
        if isinstance(selection, SelectionPolicy):
            self.policy = selection
        else:
            self.policy = SelectionPolicy(selection)
        self.toc_mode = TocMode(toc_mode) if toc_mode is not None else None
        self.error_action = ErrorAction(error_action)
        self.renderer = renderer if renderer is not None else TreeRenderer()
        self._printer = FileContentPrinter(output_format, line_numbers=line_numbers)
        self._walker = Walker(self.policy, self.error_action)
        self._selection: Optional[Selection] = None
        self._streamed = False

    @property
    def output_strategy(self) -> OutputStrategy:
        return self._printer.output_strategy

    def select(self) -> Selection:
        """Walk every root once and return the admitted files and their trees.

        Raises:
            TraversalError: If an entry cannot be read and error_action is RAISE.
        """
        if self._selection is not None:
            return self._selection

        selection = Selection()
        for root in self.paths:
            if root.is_file():
                files = self._walker.walk(root)
                if files:
                    selection.trees.append(TreeBuilder(root, is_file=True).root)
            else:
                builder = TreeBuilder(root)
                files = self._walker.walk(root, builder)
                selection.trees.append(builder.root)
            logger.debug("Selected %d file(s) under %s", len(files), root)
            selection.files.extend(files)

        self._selection = selection
        return selection

    def table_of_contents(self) -> str:
        """Rendered tree of the selection, or an empty string without a toc mode."""
        if self.toc_mode is None:
            return ""
        return self.renderer.render(self.select().trees, self.toc_mode)

    def stream_output(self) -> Iterator[str]:
        """Yield the output parts in order, without separators.

        Raises:
            RuntimeError: If the output has already been streamed.
            TraversalError: If an entry cannot be read and error_action is RAISE.
            OSError: If a selected file cannot be read.
        """
        if self._streamed:
            raise RuntimeError("Output has already been streamed")
        self._streamed = True

        strategy = self.output_strategy
        start = strategy.start_output()
        if start:
            yield start

        toc = self.table_of_contents()
        if toc:
            yield strategy.format_table_of_contents(toc)
            yield ""

        yield from self._printer.yield_formatted_files(self.select().files)

        end = strategy.end_output()
        if end:
            yield end

    def render(self) -> str:
        """The complete output as one string (parts joined by newlines)."""
        return "\n".join(self.stream_output())
