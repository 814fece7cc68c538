"""Structural (de)serialization of arena trees.

The format is a direct dump of the arena: the slot list in index order and
the root index. Handles therefore survive a round trip unchanged. The format
carries a version number but no compatibility promise between versions.

    {
        "version": 1,
        "root": 0,
        "nodes": [
            {"data": "root", "parent": null, "children": [1]},
            {"data": "a", "parent": 0, "children": []}
        ]
    }

Unused slots are stored as null.
"""

import json
from collections import Counter
from typing import Any, Callable, Dict, List, Optional

from .core.errors import TreeFormatError
from .core.node import Node, NodeId
from .core.tree import Tree

FORMAT_VERSION = 1

Encoder = Callable[[Any], Any]
Decoder = Callable[[Any], Any]


def _identity(value: Any) -> Any:
    return value


def to_dict(tree: Tree, encode: Optional[Encoder] = None) -> Dict[str, Any]:
    """Dump the raw arena of ``tree`` into plain Python data.

    Args:
        tree: Tree to dump
        encode: Maps each payload to a JSON-compatible value (default: as is)

    Returns:
        Dictionary with ``version``, ``root`` and ``nodes`` keys
    """
    encode = encode or _identity
    nodes: List[Optional[Dict[str, Any]]] = []
    for slot in tree._slots():
        if slot is None:
            nodes.append(None)
            continue
        nodes.append({
            'data': encode(slot.data),
            'parent': None if slot.parent is None else slot.parent.index,
            'children': [child.index for child in slot.children],
        })

    return {
        'version': FORMAT_VERSION,
        'root': None if tree.root is None else tree.root.index,
        'nodes': nodes,
    }


def from_dict(data: Dict[str, Any], decode: Optional[Decoder] = None) -> Tree:
    """Rebuild a tree from the output of :func:`to_dict`.

    Every slot keeps its index. The structure is checked before the tree is
    returned: links must be in range and agree in both directions, each
    child must be listed exactly once, and every live node must be
    reachable from the root.

    Args:
        data: Dictionary produced by to_dict (or parsed from JSON)
        decode: Maps each stored payload back to a value (default: as is)

    Returns:
        The rebuilt Tree

    Raises:
        TreeFormatError: If the data is malformed
    """
    decode = decode or _identity

    if not isinstance(data, dict):
        raise TreeFormatError(f"expected a mapping, got {type(data).__name__}")
    version = data.get('version')
    if version != FORMAT_VERSION:
        raise TreeFormatError(f"unsupported format version: {version!r}")

    raw_nodes = data.get('nodes')
    if not isinstance(raw_nodes, list):
        raise TreeFormatError("'nodes' must be a list")
    size = len(raw_nodes)

    def _index(value: Any, what: str) -> NodeId:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < size:
            raise TreeFormatError(f"{what} is not a valid index: {value!r}")
        return NodeId(value)

    slots: List[Optional[Node]] = []
    for i, raw in enumerate(raw_nodes):
        if raw is None:
            slots.append(None)
            continue
        if not isinstance(raw, dict) or 'data' not in raw:
            raise TreeFormatError(f"slot {i} is not a node record")
        parent = raw.get('parent')
        children = raw.get('children', [])
        if not isinstance(children, list):
            raise TreeFormatError(f"slot {i}: 'children' must be a list")
        slots.append(Node(
            decode(raw['data']),
            parent=None if parent is None else _index(parent, f"slot {i} parent"),
            children=[_index(c, f"slot {i} child") for c in children],
        ))

    root_value = data.get('root')
    root = None if root_value is None else _index(root_value, "root")
    _validate_structure(slots, root)
    return Tree._from_slots(slots, root)


def _validate_structure(slots: List[Optional[Node]], root: Optional[NodeId]) -> None:
    live = [i for i, slot in enumerate(slots) if slot is not None]
    # How often each (parent, child) link is listed
    links = Counter((i, child) for i in live for child in slots[i].children)

    if root is None:
        if live:
            raise TreeFormatError("tree has nodes but no root")
        return

    root_node = slots[root.index]
    if root_node is None:
        raise TreeFormatError(f"root {root!r} refers to an unused slot")
    if root_node.parent is not None:
        raise TreeFormatError("root must not have a parent")

    for i in live:
        node = slots[i]
        if i != root.index and node.parent is None:
            raise TreeFormatError(f"slot {i} has no parent but is not the root")
        if node.parent is not None:
            parent_node = slots[node.parent.index]
            if parent_node is None:
                raise TreeFormatError(f"slot {i} has an unused slot as parent")
            if links[(node.parent.index, NodeId(i))] != 1:
                raise TreeFormatError(
                    f"slot {i} must appear exactly once among its parent's children"
                )
        for child in node.children:
            child_node = slots[child.index]
            if child_node is None or child_node.parent != NodeId(i):
                raise TreeFormatError(f"slot {i} lists {child!r} whose parent is not {i}")

    # Parent and child links agree, so walking down from the root visits
    # each reachable node once; anything left over sits on a cycle.
    seen = set()
    stack = [root]
    while stack:
        node_id = stack.pop()
        seen.add(node_id.index)
        stack.extend(slots[node_id.index].children)
    if len(seen) != len(live):
        raise TreeFormatError("some nodes are not reachable from the root")


def dumps(tree: Tree, encode: Optional[Encoder] = None, **json_kwargs) -> str:
    """Serialize ``tree`` to a JSON string.

    Extra keyword arguments go to :func:`json.dumps`.
    """
    json_kwargs.setdefault('ensure_ascii', False)
    return json.dumps(to_dict(tree, encode), **json_kwargs)


def loads(text: str, decode: Optional[Decoder] = None) -> Tree:
    """Rebuild a tree from a JSON string produced by :func:`dumps`.

    Raises:
        TreeFormatError: If the text is not valid JSON or not a valid tree
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise TreeFormatError(f"invalid JSON: {e}") from e
    return from_dict(data, decode)
