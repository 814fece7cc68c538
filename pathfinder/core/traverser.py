"""Tree traversal strategies for the arena tree.

Traversers walk a Tree through its handles and yield ``(NodeId, depth)``
pairs, depth being relative to the node the walk started from. They use an
explicit stack or queue rather than recursion, so very deep trees do not run
into the interpreter's recursion limit.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import TYPE_CHECKING, Deque, Iterator, List, Optional, Tuple

from .node import NodeId

if TYPE_CHECKING:
    from .tree import Tree


class TreeTraverser(ABC):
    """Abstract base class for tree traversal strategies.

    A traverser is bound to one tree. Children are always visited in
    insertion order.
    """

    def __init__(self, tree: "Tree"):
        """Initialize traverser with the tree to walk.

        Args:
            tree: Tree whose handles will be traversed
        """
        self.tree = tree

    @abstractmethod
    def traverse(self,
                 start: NodeId,
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple[NodeId, int]]:
        """Traverse the subtree rooted at ``start``.

        Args:
            start: Handle of the first node to visit
            max_depth: Maximum depth to traverse (None = unlimited)
            min_depth: Minimum depth before yielding nodes

        Yields:
            Tuples of (handle, depth) where depth is relative to start
        """
        pass

    def _should_yield(self, depth: int, min_depth: int, max_depth: Optional[int]) -> bool:
        if depth < min_depth:
            return False
        if max_depth is not None and depth > max_depth:
            return False
        return True

    def _should_explore(self, depth: int, max_depth: Optional[int]) -> bool:
        if max_depth is None:
            return True
        return depth < max_depth


class DepthFirstPreOrderTraverser(TreeTraverser):
    """Depth-first pre-order traversal.

    Visits a node before its children, and children left to right.
    """

    def traverse(self,
                 start: NodeId,
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple[NodeId, int]]:
        stack: List[Tuple[NodeId, int]] = [(start, 0)]

        while stack:
            node_id, depth = stack.pop()

            if self._should_yield(depth, min_depth, max_depth):
                yield (node_id, depth)

            if self._should_explore(depth, max_depth):
                # Reversed so the first child is popped first
                for child in reversed(self.tree.children(node_id)):
                    stack.append((child, depth + 1))


class DepthFirstPostOrderTraverser(TreeTraverser):
    """Depth-first post-order traversal.

    Visits children before their parent. Handy for bottom-up aggregation
    such as computing subtree sizes.
    """

    def traverse(self,
                 start: NodeId,
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple[NodeId, int]]:
        # Third element marks nodes whose children are already on the stack
        stack: List[Tuple[NodeId, int, bool]] = [(start, 0, False)]

        while stack:
            node_id, depth, expanded = stack.pop()

            if expanded:
                if self._should_yield(depth, min_depth, max_depth):
                    yield (node_id, depth)
                continue

            stack.append((node_id, depth, True))
            if self._should_explore(depth, max_depth):
                for child in reversed(self.tree.children(node_id)):
                    stack.append((child, depth + 1, False))


class BreadthFirstTraverser(TreeTraverser):
    """Breadth-first (level-order) traversal.

    Visits every node at depth N before any node at depth N+1. Within a
    level, nodes come out grouped by parent in insertion order.
    """

    def traverse(self,
                 start: NodeId,
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple[NodeId, int]]:
        queue: Deque[Tuple[NodeId, int]] = deque([(start, 0)])

        while queue:
            node_id, depth = queue.popleft()

            if self._should_yield(depth, min_depth, max_depth):
                yield (node_id, depth)

            if self._should_explore(depth, max_depth):
                for child in self.tree.children(node_id):
                    queue.append((child, depth + 1))


# Factory function for creating traversers by name
def create_traverser(strategy: str, tree: "Tree") -> TreeTraverser:
    """Create a traverser instance by strategy name.

    Args:
        strategy: Name of traversal strategy (dfs_pre, dfs_post, bfs, ...)
        tree: Tree to traverse

    Returns:
        TreeTraverser instance

    Raises:
        ValueError: If strategy name is not recognized
    """
    strategies = {
        'dfs': DepthFirstPreOrderTraverser,
        'dfs_pre': DepthFirstPreOrderTraverser,
        'depth_first_pre': DepthFirstPreOrderTraverser,
        'dfs_post': DepthFirstPostOrderTraverser,
        'depth_first_post': DepthFirstPostOrderTraverser,
        'bfs': BreadthFirstTraverser,
        'breadth_first': BreadthFirstTraverser,
        'level': BreadthFirstTraverser,
        'level_order': BreadthFirstTraverser,
    }

    strategy_lower = strategy.lower()
    if strategy_lower not in strategies:
        raise ValueError(
            f"Unknown traversal strategy: {strategy}. "
            f"Choose from: {', '.join(strategies.keys())}"
        )

    return strategies[strategy_lower](tree)
