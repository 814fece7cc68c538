#!/usr/bin/env python3
"""
Basic example: print a directory as a tree and inspect it by handle.

This example demonstrates:
- Building a Tree[str] from a directory with build_tree_from_path
- Rendering it with fmt_tree
- Navigating with parent()/children() and walking breadth-first
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from pathfinder import ScanConfig, Tree, build_tree_from_path


def main():
    """Print the tree under a directory plus a few statistics."""
    # Get the root path from command line or use current directory
    root_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()

    tree: Tree[str] = Tree()
    build_tree_from_path(tree, root_path, config=ScanConfig.deterministic())

    print(tree.fmt_tree(lambda name: name), end="")

    leaves = [h for h in tree.dfs() if tree.is_leaf(h)]
    deepest = max(tree.walk("bfs"), key=lambda pair: pair[1])

    print("\nSummary:")
    print(f"  Nodes: {len(tree):,}")
    print(f"  Leaves: {len(leaves):,}")
    path = [tree.get(h) for h in reversed(list(tree.ancestors(deepest[0])))]
    path.append(tree.get(deepest[0]))
    print(f"  Deepest entry ({deepest[1]} levels): {'/'.join(path)}")


if __name__ == "__main__":
    main()
