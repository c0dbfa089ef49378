"""Incremental assembly of a selection tree for one traversal root."""

from pathlib import Path, PurePath
from typing import Optional, Union

from filefuse.file_system_tree.tree_node import TreeNode
from filefuse.types import PathType


def root_display_name(path: PathType) -> str:
    """Name shown for a traversal root.

    Paths without a final segment, such as ``.`` or ``..``, use the name of the
    directory they resolve to.

    Example:
        >>> root_display_name("projects/demo/")
        'demo'
    """
    path = Path(path)
    name = path.name
    if not name or name == "..":
        name = path.resolve().name
    return name or str(path)


class TreeBuilder:
    """Builds the tree of one traversal root from root-relative insertions.

    Every insertion decomposes the path into segments and walks down from the root,
    creating intermediate directory nodes on first encounter. Lookups go by segment
    name, so inserting the same path twice leaves the tree unchanged.

    Attributes:
        root (TreeNode): The root node, named after the traversal root.

    Example:
        >>> builder = TreeBuilder("project")
        >>> _ = builder.insert("src/main.py", is_file=True)
        >>> _ = builder.insert("src/main.py", is_file=True)
        >>> builder.count_nodes(), builder.count_files()
        (3, 1)
    """

    def __init__(self, root_path: PathType, is_file: bool = False, name: Optional[str] = None) -> None:
        self.root = TreeNode(name or root_display_name(root_path), root_path, is_file=is_file)

    def insert(self, relative_path: Union[str, PurePath], is_file: bool) -> TreeNode:
        """Insert a root-relative path; the final segment gets the ``is_file`` flag.

        Intermediate segments are always directories. If the final node already
        exists it is returned unchanged.

        Returns:
            The node for the final segment (the root for an empty path).

        Raises:
            ValueError: If the path is absolute, climbs above the root, or passes
                through an existing file node.
        """
        relative = PurePath(relative_path)
        if relative.is_absolute() or ".." in relative.parts:
            raise ValueError(f"Expected a path inside the tree root, got {str(relative_path)!r}")

        current = self.root
        parts = relative.parts
        for index, segment in enumerate(parts):
            child = current.get_child(segment)
            if child is None:
                node_is_file = is_file and index == len(parts) - 1
                child = TreeNode(segment, current.fs_path / segment, is_file=node_is_file, parent=current)
            current = child
        return current

    def count_nodes(self) -> int:
        return int(self.root.count_nodes())

    def count_files(self) -> int:
        return int(self.root.count_files())

    def estimate_render_lines(self, show_files: bool) -> int:
        return int(self.root.estimate_render_lines(show_files))
