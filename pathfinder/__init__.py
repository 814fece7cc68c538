"""Pathfinder - arena-backed rooted trees.

Pathfinder stores every node of a tree in one flat arena and hands out
stable NodeId handles instead of node references:

    from pathfinder import Tree

    tree = Tree()
    root = tree.set_root("root")
    a = tree.add_child(root, "a")
    tree.add_child(a, "a1")
    print(tree.fmt_tree(), end="")

A filesystem adapter builds trees from directories:

    from pathfinder import render_path
    print(render_path("src", sort_entries=True), end="")
"""

__version__ = "0.1.0"

# Core
from .core import (
    NodeId,
    Tree,
    ChildrenView,
    PayloadRef,
    TreeError,
    InvalidNodeIdError,
    RootAlreadySetError,
    TreeFormatError,
    TreeTraverser,
    DepthFirstPreOrderTraverser,
    DepthFirstPostOrderTraverser,
    BreadthFirstTraverser,
    create_traverser,
)

# Adapters and configuration
from .config import ScanConfig
from .adapters.filesystem import (
    FileSystemTreeBuilder,
    build_tree_from_path,
    display_name,
)

# Serialization
from .serialization import to_dict, from_dict, dumps, loads

# High-level API
from .api import build_tree, render_path

__all__ = [
    "__version__",
    # Core
    'NodeId',
    'Tree',
    'ChildrenView',
    'PayloadRef',
    'TreeError',
    'InvalidNodeIdError',
    'RootAlreadySetError',
    'TreeFormatError',
    'TreeTraverser',
    'DepthFirstPreOrderTraverser',
    'DepthFirstPostOrderTraverser',
    'BreadthFirstTraverser',
    'create_traverser',
    # Adapters and configuration
    'ScanConfig',
    'FileSystemTreeBuilder',
    'build_tree_from_path',
    'display_name',
    # Serialization
    'to_dict',
    'from_dict',
    'dumps',
    'loads',
    # API
    'build_tree',
    'render_path',
]
