"""Text rendering of selection trees with branch connectors."""

from typing import Iterator, List, Optional, Sequence

from filefuse.file_system_tree.tree_node import TreeNode
from filefuse.types import TocMode

# Auto mode lists files only when the full rendering would take fewer lines than this.
AUTO_TOC_LINE_THRESHOLD = 100

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_INDENT = "│   "
SPACE_INDENT = "    "


class TreeRenderer:
    """Renders one or more selection trees in the style of the Unix ``tree`` command.

    Trees are rendered depth-first, one line per visible node. The last child of a
    list gets the ``└──`` connector, earlier children ``├──``; ancestors that are not
    the last child extend a ``│`` down the indentation. Directory names carry a
    trailing ``/``. Multiple roots are rendered consecutively, each treated as a
    sibling within the list of roots.

    Attributes:
        auto_threshold (int): Line count at or above which auto mode hides files.

    Example:
        >>> from filefuse.file_system_tree.tree_builder import TreeBuilder
        >>> builder = TreeBuilder("project")
        >>> _ = builder.insert("a.txt", is_file=True)
        >>> _ = builder.insert("sub/b.txt", is_file=True)
        >>> print(TreeRenderer().render([builder.root], TocMode.FILES_AND_DIRS))
        └── project/
            ├── a.txt
            └── sub/
                └── b.txt
        >>> print(TreeRenderer().render([builder.root], TocMode.DIRS_ONLY))
        └── project/
            └── sub/
    """

    def __init__(self, auto_threshold: int = AUTO_TOC_LINE_THRESHOLD) -> None:
        self.auto_threshold = auto_threshold

    def show_files(self, trees: Sequence[TreeNode], mode: TocMode) -> bool:
        """Resolve whether files are shown for the given trees and mode."""
        if mode == TocMode.DIRS_ONLY:
            return False
        if mode == TocMode.FILES_AND_DIRS:
            return True
        total_lines = sum(tree.estimate_render_lines(show_files=True) for tree in trees)
        return total_lines < self.auto_threshold

    def stream_render(self, trees: Sequence[TreeNode], mode: TocMode) -> Iterator[str]:
        """Generate the rendering one line at a time (without newlines)."""
        show_files = self.show_files(trees, mode)
        for index, tree in enumerate(trees):
            yield from self._render_node(tree, "", index == len(trees) - 1, show_files)

    def render(self, trees: Sequence[TreeNode], mode: Optional[TocMode]) -> str:
        """Render all trees as one string; empty when there is nothing to render."""
        if mode is None or not trees:
            return ""
        lines: List[str] = list(self.stream_render(trees, mode))
        return "\n".join(lines)

    def _render_node(self, node: TreeNode, prefix: str, is_last: bool, show_files: bool) -> Iterator[str]:
        if node.is_file and not show_files:
            return

        connector = LAST_BRANCH if is_last else BRANCH
        label = node.name if node.is_file else f"{node.name}/"
        yield f"{prefix}{connector}{label}"

        children = node.sorted_children
        if not show_files:
            children = [child for child in children if not child.is_file]
        child_prefix = prefix + (SPACE_INDENT if is_last else PIPE_INDENT)
        for index, child in enumerate(children):
            yield from self._render_node(child, child_prefix, index == len(children) - 1, show_files)
