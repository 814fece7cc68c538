"""Exceptions raised by the arena tree.

InvalidNodeIdError and RootAlreadySetError mean the caller misused the tree.
They are raised before anything is modified and are not meant to be caught
and retried.
"""

from typing import Optional

from .node import NodeId


class TreeError(Exception):
    """Base class for all tree errors."""
    pass


class InvalidNodeIdError(TreeError, LookupError):
    """Raised when a handle does not refer to a live node of this tree."""

    def __init__(self, node_id: NodeId, size: int):
        self.node_id = node_id
        self.size = size
        super().__init__(f"invalid NodeId: {node_id!r} (arena has {size} slots)")


class RootAlreadySetError(TreeError):
    """Raised when set_root is called on a tree that already has a root."""

    def __init__(self, root: Optional[NodeId]):
        self.root = root
        super().__init__(f"root already exists: {root!r}")


class TreeFormatError(TreeError, ValueError):
    """Raised when serialized tree data is malformed."""
    pass
