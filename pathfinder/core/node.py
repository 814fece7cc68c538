"""Node records and handles for the arena tree.

Nodes never point at each other directly. A node stores its parent and its
children as NodeId handles, and the Tree that owns the slots is the only place
those handles can be resolved.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, Iterator, List, Optional, TypeVar, overload

if TYPE_CHECKING:
    from .tree import Tree

T = TypeVar("T")


@dataclass(frozen=True)
class NodeId:
    """Stable handle to a node inside a Tree arena.

    A NodeId is just an index into the arena's slot list. Two handles are
    equal if and only if their indices are equal, which also makes them
    usable as dict keys and set members.

    A handle is only meaningful for the tree that issued it. Nothing stops a
    caller from passing a handle from one tree to another; doing so is a bug
    in the caller.
    """

    index: int

    def __post_init__(self):
        # bool is an int subclass but never a sensible index
        if not isinstance(self.index, int) or isinstance(self.index, bool):
            raise TypeError(
                f"NodeId index must be an int, got {type(self.index).__name__}"
            )
        if self.index < 0:
            raise ValueError(f"NodeId index must be non-negative, got {self.index}")

    def __int__(self) -> int:
        return self.index

    def __repr__(self) -> str:
        return f"NodeId({self.index})"


@dataclass
class Node(Generic[T]):
    """A single occupied slot in the arena."""

    data: T
    parent: Optional[NodeId] = None
    children: List[NodeId] = field(default_factory=list)


class ChildrenView(Sequence):
    """Read-only, restartable view over a node's child handles.

    The view wraps the node's own list, so creating it costs nothing and it
    reflects children appended after it was created. Use ``list(view)`` for a
    snapshot.
    """

    __slots__ = ("_children",)

    def __init__(self, children: List[NodeId]):
        self._children = children

    @overload
    def __getitem__(self, index: int) -> NodeId: ...

    @overload
    def __getitem__(self, index: slice) -> List[NodeId]: ...

    def __getitem__(self, index):
        return self._children[index]

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[NodeId]:
        return iter(self._children)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ChildrenView):
            return self._children == other._children
        if isinstance(other, (list, tuple)):
            return list(self._children) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"ChildrenView({self._children!r})"


class PayloadRef(Generic[T]):
    """Mutable view of one node's payload.

    Returned by :meth:`Tree.get_mut`. Reading ``value`` always goes back to
    the arena, and assigning ``value`` stores the new payload in the slot.
    The structure of the tree is never touched through a PayloadRef.
    """

    __slots__ = ("_tree", "_node_id")

    def __init__(self, tree: "Tree[T]", node_id: NodeId):
        self._tree = tree
        self._node_id = node_id

    @property
    def node_id(self) -> NodeId:
        return self._node_id

    @property
    def value(self) -> T:
        return self._tree.get(self._node_id)

    @value.setter
    def value(self, new_value: T) -> None:
        self._tree.set(self._node_id, new_value)

    def __repr__(self) -> str:
        return f"PayloadRef({self._node_id!r}, value={self.value!r})"
