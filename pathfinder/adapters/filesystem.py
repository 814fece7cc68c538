"""Filesystem adapter for pathfinder.

Walks a directory depth-first and records every entry's name in a Tree.
The walk only talks to the tree through set_root and add_child.

Errors are not swallowed: if any directory cannot be listed, the OSError
propagates out of the walk and the caller decides what to do with the
partially built tree.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..config import ScanConfig
from ..core.node import NodeId
from ..core.tree import Tree

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def display_name(path: PathLike) -> str:
    """Return the name shown for ``path`` in a rendered tree.

    This is the final path component, or the whole path when there is no
    proper final component (``/``, ``.``, ``..``, a bare drive).
    """
    path = Path(path)
    name = path.name
    if not name or name == "..":
        return str(path)
    return name


class FileSystemTreeBuilder:
    """Builds a Tree of entry names from a directory on disk.

    Example:
        >>> builder = FileSystemTreeBuilder(ScanConfig(sort_entries=True))
        >>> tree = builder.build("/etc/ssh")
        >>> print(tree.fmt_tree())
    """

    def __init__(self, config: Optional[ScanConfig] = None):
        """Initialize builder.

        Args:
            config: Walk configuration (defaults to ScanConfig())
        """
        self.config = config or ScanConfig()
        self.directories_scanned = 0
        self.nodes_added = 0

    def build(self, path: PathLike) -> Tree[str]:
        """Walk ``path`` into a new tree and return it."""
        tree: Tree[str] = Tree()
        self.add_path(tree, path)
        return tree

    def add_path(self,
                 tree: Tree[str],
                 path: PathLike,
                 parent: Optional[NodeId] = None) -> NodeId:
        """Add ``path`` and everything below it to ``tree``.

        Args:
            tree: Tree to populate
            path: File or directory to add
            parent: Node to attach under; None makes ``path`` the root

        Returns:
            Handle of the node created for ``path``

        Raises:
            OSError: If a directory cannot be listed
            RootAlreadySetError: If ``parent`` is None and the tree has a root
        """
        depth = 0 if parent is None else tree.depth(parent) + 1
        path = Path(path)
        is_dir = path.is_dir()
        if is_dir and not self.config.follow_symlinks:
            is_dir = not path.is_symlink()

        # (path, parent handle, depth, is_dir) work items, popped in pre-order
        stack: List[Tuple[Path, Optional[NodeId], int, bool]] = [(path, parent, depth, is_dir)]
        top: Optional[NodeId] = None

        while stack:
            path, parent, depth, is_dir = stack.pop()
            node_id = self._add_node(tree, path, parent)
            if top is None:
                top = node_id

            if not is_dir or not self.config.should_descend(depth):
                continue

            logger.debug("Scanning directory %s (depth %d)", path, depth)
            self.directories_scanned += 1

            with os.scandir(path) as it:
                entries = [entry for entry in it if self.config.should_include(entry.name)]
            if self.config.sort_entries:
                entries.sort(key=lambda entry: entry.name)

            # Reversed so the first entry is popped first
            for entry in reversed(entries):
                child_is_dir = entry.is_dir(follow_symlinks=self.config.follow_symlinks)
                stack.append((Path(entry.path), node_id, depth + 1, child_is_dir))

        return top

    def _add_node(self,
                  tree: Tree[str],
                  path: Path,
                  parent: Optional[NodeId]) -> NodeId:
        name = display_name(path)
        if parent is None:
            node_id = tree.set_root(name)
        else:
            node_id = tree.add_child(parent, name)
        self.nodes_added += 1
        return node_id


def build_tree_from_path(tree: Tree[str],
                         path: PathLike,
                         parent: Optional[NodeId] = None,
                         config: Optional[ScanConfig] = None) -> NodeId:
    """Add ``path`` and everything below it to ``tree``.

    Creates the root when ``parent`` is None and a child of ``parent``
    otherwise, then descends into directories.

    Args:
        tree: Tree to populate
        path: File or directory to add
        parent: Node to attach under, or None for the root
        config: Walk configuration (defaults to ScanConfig())

    Returns:
        Handle of the node created for ``path``

    Raises:
        OSError: If any directory in the walk cannot be listed
    """
    return FileSystemTreeBuilder(config).add_path(tree, path, parent)
