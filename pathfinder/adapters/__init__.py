"""Adapters that populate trees from external sources."""

from .filesystem import (
    FileSystemTreeBuilder,
    build_tree_from_path,
    display_name,
)

__all__ = [
    'FileSystemTreeBuilder',
    'build_tree_from_path',
    'display_name',
]
