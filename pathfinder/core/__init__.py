"""Core arena tree components."""

from .node import NodeId, Node, ChildrenView, PayloadRef
from .errors import TreeError, InvalidNodeIdError, RootAlreadySetError, TreeFormatError
from .traverser import (
    TreeTraverser,
    DepthFirstPreOrderTraverser,
    DepthFirstPostOrderTraverser,
    BreadthFirstTraverser,
    create_traverser,
)
from .tree import Tree

__all__ = [
    'NodeId',
    'Node',
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
    'Tree',
]
