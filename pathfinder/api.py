"""High-level API for pathfinder.

Simple functions covering the common case of turning a directory into a
rendered tree, without dealing with builders and configs directly.
"""

import errno
import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Optional, Union

from .adapters.filesystem import FileSystemTreeBuilder
from .config import ScanConfig
from .core.tree import Tree

logger = logging.getLogger(__name__)


def build_tree(path: Union[str, os.PathLike],
               config: Optional[ScanConfig] = None,
               **overrides) -> Tree[str]:
    """Build a tree of entry names from a filesystem path.

    Args:
        path: File or directory to walk
        config: Walk configuration (defaults to ScanConfig())
        **overrides: ScanConfig fields to override, e.g. ``sort_entries=True``

    Returns:
        Tree whose payloads are entry names

    Raises:
        FileNotFoundError: If ``path`` does not exist
        ValueError: If the configuration is invalid
        OSError: If a directory in the walk cannot be listed

    Example:
        >>> tree = build_tree("src", sort_entries=True, exclude_patterns={"__pycache__"})
        >>> print(tree.fmt_tree(), end="")
    """
    config = _resolve_config(config, overrides)
    path = Path(path)
    if not os.path.lexists(path):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))

    builder = FileSystemTreeBuilder(config)
    tree = builder.build(path)
    logger.info(
        "Built tree for %s: %d nodes, %d directories scanned",
        path, len(tree), builder.directories_scanned,
    )
    return tree


def render_path(path: Union[str, os.PathLike],
                config: Optional[ScanConfig] = None,
                **overrides) -> str:
    """Build the tree for ``path`` and render it like the ``tree`` command."""
    return build_tree(path, config, **overrides).fmt_tree(str)


def _resolve_config(config: Optional[ScanConfig], overrides: dict) -> ScanConfig:
    config = config or ScanConfig()
    if overrides:
        # Copy so the caller's config is left as it was
        config = replace(config, **overrides)

    errors = config.validate()
    if errors:
        raise ValueError(f"Invalid configuration: {'; '.join(errors)}")
    return config
