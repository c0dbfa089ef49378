"""Traversal and tree representation of a filtered selection.

This package provides the walker that applies the selection policy during a
single pass over each root, and the tree classes that summarise what it admitted.
"""

from .error_action import ErrorAction
from .tree_builder import TreeBuilder
from .tree_node import TreeNode
from .tree_renderer import AUTO_TOC_LINE_THRESHOLD, TreeRenderer
from .walker import Walker

__all__ = [
    "AUTO_TOC_LINE_THRESHOLD",
    "ErrorAction",
    "TreeBuilder",
    "TreeNode",
    "TreeRenderer",
    "Walker",
]
