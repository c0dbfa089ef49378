"""Node representation for entries of a selection tree."""

from pathlib import Path
from typing import Any, Dict, List, Optional

from anytree import Node, PreOrderIter

from filefuse.types import PathType


class TreeNode(Node):  # type: ignore
    """Node representing one file or directory in a selection tree.

    Extends anytree.Node with the entry's path and a file/directory flag. Children
    are indexed by name: two children of one node never share a name, and
    :attr:`sorted_children` iterates them in lexicographic order whatever order they
    were attached in. File nodes cannot have children.

    Attributes:
        name (str): Final path segment.
        fs_path (Path): Filesystem path of the entry as walked. Named apart from
            anytree's ``path``, which is the chain of nodes from the root.
        is_file (bool): True for files, False for directories.

    Example:
        >>> root = TreeNode("root", "/root")
        >>> _ = TreeNode("b.txt", "/root/b.txt", is_file=True, parent=root)
        >>> _ = TreeNode("a", "/root/a", parent=root)
        >>> [child.name for child in root.sorted_children]
        ['a', 'b.txt']
        >>> root.count_nodes(), root.count_files()
        (3, 1)
    """

    def __init__(
        self,
        name: str,
        path: PathType,
        is_file: bool = False,
        parent: Optional["TreeNode"] = None,
        **kwargs: Any,
    ) -> None:
        # Set before anytree attaches the node so the attach hooks can see them.
        self.fs_path = Path(path)
        self.is_file = is_file
        self._by_name: Dict[str, "TreeNode"] = {}
        super().__init__(name, parent, **kwargs)

    def _pre_attach(self, parent: "TreeNode") -> None:
        if parent.is_file:
            raise ValueError(f"Cannot attach {self.name!r} under file node {parent.name!r}")
        existing = parent._by_name.get(self.name)
        if existing is not None and existing is not self:
            raise ValueError(f"Node {parent.name!r} already has a child named {self.name!r}")

    def _post_attach(self, parent: "TreeNode") -> None:
        parent._by_name[self.name] = self

    def _post_detach(self, parent: "TreeNode") -> None:
        parent._by_name.pop(self.name, None)

    def get_child(self, name: str) -> Optional["TreeNode"]:
        return self._by_name.get(name)

    def add_child(self, child: "TreeNode") -> None:
        """Attach ``child``, replacing any existing child with the same name."""
        existing = self._by_name.get(child.name)
        if existing is not None and existing is not child:
            existing.parent = None
        child.parent = self

    @property
    def sorted_children(self) -> List["TreeNode"]:
        return [self._by_name[name] for name in sorted(self._by_name)]

    def count_nodes(self) -> int:
        """Number of nodes in this subtree, including this node."""
        return 1 + len(self.descendants)

    def count_files(self) -> int:
        """Number of file nodes in this subtree."""
        return sum(1 for node in PreOrderIter(self) if node.is_file)

    def estimate_render_lines(self, show_files: bool) -> int:
        """Number of lines this subtree takes to render.

        With ``show_files`` False, file nodes contribute nothing while their ancestor
        directories still count one line each.
        """
        if not show_files and self.is_file:
            return 0
        return sum(1 for node in PreOrderIter(self) if show_files or not node.is_file)
