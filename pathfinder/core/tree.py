"""Arena-backed rooted tree.

All nodes of a Tree live in one growable list of slots. Nodes refer to their
parent and children by NodeId (an index into that list) instead of holding
references to each other, so the tree is the single owner of every node and
handles stay valid for as long as the tree exists.

Example:
    >>> tree = Tree()
    >>> root = tree.set_root("root")
    >>> a = tree.add_child(root, "a")
    >>> tree.add_child(a, "a1")
    NodeId(2)
    >>> print(tree.fmt_tree(), end="")
    root
    └── a
        └── a1
"""

from typing import Callable, Generic, Iterator, List, Optional, Tuple, TypeVar

from .errors import InvalidNodeIdError, RootAlreadySetError
from .node import ChildrenView, Node, NodeId, PayloadRef
from .traverser import (
    BreadthFirstTraverser,
    DepthFirstPostOrderTraverser,
    DepthFirstPreOrderTraverser,
    create_traverser,
)

T = TypeVar("T")

# Connectors and indentation used by fmt_tree, same as the `tree` command
BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_INDENT = "│   "
SPACE_INDENT = "    "


class Tree(Generic[T]):
    """A generic rooted tree stored in an arena.

    Slots are only ever appended. A slot holding ``None`` is unused and its
    index is retired for good; nothing in this class creates such slots, but
    deserialized trees may contain them.

    Misuse (an invalid handle, a second root) raises a TreeError subclass
    before the tree is modified.
    """

    def __init__(self):
        """Create an empty tree with no slots and no root."""
        self._nodes: List[Optional[Node[T]]] = []
        self._root: Optional[NodeId] = None
        self._live = 0

    # ===== Construction and mutation =====

    def set_root(self, data: T) -> NodeId:
        """Create the root node.

        Args:
            data: Payload for the root

        Returns:
            Handle of the new root

        Raises:
            RootAlreadySetError: If the tree already has a root
        """
        if self._root is not None:
            raise RootAlreadySetError(self._root)
        node_id = self._alloc(Node(data))
        self._root = node_id
        return node_id

    def add_child(self, parent: NodeId, data: T) -> NodeId:
        """Append a new child to ``parent``.

        The child always becomes the last of its siblings.

        Args:
            parent: Handle of an existing node
            data: Payload for the new child

        Returns:
            Handle of the new child

        Raises:
            InvalidNodeIdError: If ``parent`` is not a live node
        """
        parent_node = self._node(parent)
        child = self._alloc(Node(data, parent=parent))
        parent_node.children.append(child)
        return child

    def set(self, node_id: NodeId, data: T) -> None:
        """Replace the payload of a node. The structure is left alone."""
        self._node(node_id).data = data

    # ===== Access =====

    @property
    def root(self) -> Optional[NodeId]:
        """Handle of the root, or None for an empty tree."""
        return self._root

    def get(self, node_id: NodeId) -> T:
        """Return the payload stored at ``node_id``."""
        return self._node(node_id).data

    def get_mut(self, node_id: NodeId) -> PayloadRef[T]:
        """Return a mutable view of the payload stored at ``node_id``.

        Assigning ``ref.value`` writes the payload back into the arena::

            ref = tree.get_mut(node_id)
            ref.value = ref.value.upper()
        """
        self._check(node_id)
        return PayloadRef(self, node_id)

    def parent(self, node_id: NodeId) -> Optional[NodeId]:
        """Return the parent handle, or None if ``node_id`` is the root."""
        return self._node(node_id).parent

    def children(self, node_id: NodeId) -> ChildrenView:
        """Return the child handles of ``node_id`` in insertion order.

        The result is a lazy view, not a copy, and can be iterated any
        number of times.
        """
        return ChildrenView(self._node(node_id).children)

    def is_leaf(self, node_id: NodeId) -> bool:
        return not self._node(node_id).children

    def depth(self, node_id: NodeId) -> int:
        """Number of edges between ``node_id`` and the root."""
        return sum(1 for _ in self.ancestors(node_id))

    def ancestors(self, node_id: NodeId) -> Iterator[NodeId]:
        """Yield the parent, grandparent, ... up to and including the root."""
        current = self._node(node_id).parent
        while current is not None:
            yield current
            current = self._node(current).parent

    def is_empty(self) -> bool:
        return self._root is None

    # ===== Traversal =====

    def dfs(self) -> List[NodeId]:
        """Depth-first, pre-order list of every handle starting at the root."""
        if self._root is None:
            return []
        return [node_id for node_id, _ in DepthFirstPreOrderTraverser(self).traverse(self._root)]

    def dfs_post(self) -> List[NodeId]:
        """Depth-first, post-order list of every handle (children first)."""
        if self._root is None:
            return []
        return [node_id for node_id, _ in DepthFirstPostOrderTraverser(self).traverse(self._root)]

    def bfs(self) -> List[NodeId]:
        """Breadth-first (level-order) list of every handle starting at the root."""
        if self._root is None:
            return []
        return [node_id for node_id, _ in BreadthFirstTraverser(self).traverse(self._root)]

    def walk(self,
             strategy: str = "dfs_pre",
             max_depth: Optional[int] = None,
             min_depth: int = 0) -> Iterator[Tuple[NodeId, int]]:
        """Lazily walk the tree from the root, yielding (handle, depth) pairs.

        Args:
            strategy: Traversal strategy name (dfs_pre, dfs_post, bfs, ...)
            max_depth: Maximum depth to traverse (None = unlimited)
            min_depth: Minimum depth before yielding nodes

        Raises:
            ValueError: If the strategy name is not recognized
        """
        traverser = create_traverser(strategy, self)
        if self._root is None:
            return iter(())
        return traverser.traverse(self._root, max_depth=max_depth, min_depth=min_depth)

    # ===== Rendering =====

    def fmt_tree(self, label: Callable[[T], str] = str) -> str:
        """Render the tree the way the ``tree`` command renders directories.

        One line per node, in pre-order. The root line is the bare label;
        every other line gets its ancestors' indentation followed by
        ``├── `` or, for the last child of its parent, ``└── ``.

        Args:
            label: Maps a payload to its display string. Called once per node.

        Returns:
            The rendered text, each line ending with a newline. An empty tree
            renders as an empty string.
        """
        if self._root is None:
            return ""

        lines: List[str] = []
        # (node, indentation inherited from ancestors, is last sibling, is root)
        stack: List[Tuple[NodeId, str, bool, bool]] = [(self._root, "", True, True)]

        while stack:
            node_id, prefix, is_last, is_root = stack.pop()
            node = self._node(node_id)

            if is_root:
                lines.append(f"{label(node.data)}\n")
                child_prefix = ""
            else:
                connector = LAST_BRANCH if is_last else BRANCH
                lines.append(f"{prefix}{connector}{label(node.data)}\n")
                child_prefix = prefix + (SPACE_INDENT if is_last else PIPE_INDENT)

            count = len(node.children)
            for i in range(count - 1, -1, -1):
                stack.append((node.children[i], child_prefix, i == count - 1, False))

        return "".join(lines)

    # ===== Dunder helpers =====

    def __getitem__(self, node_id: NodeId) -> T:
        return self.get(node_id)

    def __setitem__(self, node_id: NodeId, data: T) -> None:
        self.set(node_id, data)

    def __contains__(self, node_id: object) -> bool:
        return (
            isinstance(node_id, NodeId)
            and node_id.index < len(self._nodes)
            and self._nodes[node_id.index] is not None
        )

    def __len__(self) -> int:
        """Number of live nodes."""
        return self._live

    def __iter__(self) -> Iterator[NodeId]:
        """Iterate over handles in pre-order."""
        return iter(self.dfs())

    def __str__(self) -> str:
        return self.fmt_tree(str)

    def __repr__(self) -> str:
        return f"Tree(nodes={self._live}, root={self._root!r})"

    # ===== Internals =====

    def _alloc(self, node: Node[T]) -> NodeId:
        node_id = NodeId(len(self._nodes))
        self._nodes.append(node)
        self._live += 1
        return node_id

    def _check(self, node_id: NodeId) -> None:
        if node_id not in self:
            raise InvalidNodeIdError(node_id, len(self._nodes))

    def _node(self, node_id: NodeId) -> Node[T]:
        self._check(node_id)
        return self._nodes[node_id.index]

    def _slots(self) -> List[Optional[Node[T]]]:
        """Raw slot list, unused slots included. Read-only for callers."""
        return self._nodes

    @classmethod
    def _from_slots(cls, slots: List[Optional[Node[T]]], root: Optional[NodeId]) -> "Tree[T]":
        """Build a tree directly from raw slots. Callers validate the slots."""
        tree = cls()
        tree._nodes = slots
        tree._root = root
        tree._live = sum(1 for slot in slots if slot is not None)
        return tree
