"""Command-line interface for pathfinder.

Usage:
    pathfinder PATH                 # Print the tree under PATH
    pathfinder PATH --sort          # Sort entries for stable output
    pathfinder PATH --max-depth 2   # Only show two levels below PATH
    python -m pathfinder PATH -v    # Log progress to stderr
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .api import build_tree
from .config import ScanConfig

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pathfinder",
        description="Print a directory as a tree.",
    )
    parser.add_argument("path", help="Path to scan")
    parser.add_argument(
        "--sort", action="store_true",
        help="Sort entries by name (default: directory listing order)",
    )
    parser.add_argument(
        "--no-hidden", action="store_true",
        help="Skip entries whose name starts with '.'",
    )
    parser.add_argument(
        "--no-follow-symlinks", action="store_true",
        help="Do not descend into symlinked directories",
    )
    parser.add_argument(
        "--exclude", action="append", default=[], metavar="PATTERN",
        help="Skip entries matching this glob pattern (repeatable)",
    )
    parser.add_argument(
        "--max-depth", type=int, default=None, metavar="N",
        help="Do not descend more than N levels below PATH",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    return parser


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by ``-v`` count."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit status."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    config = ScanConfig(
        sort_entries=args.sort,
        include_hidden=not args.no_hidden,
        exclude_patterns=set(args.exclude) or None,
        follow_symlinks=not args.no_follow_symlinks,
        max_depth=args.max_depth,
    )

    try:
        tree = build_tree(args.path, config)
    except ValueError as e:
        parser.error(str(e))
    except OSError as e:
        logger.debug("Walk of %s failed", args.path, exc_info=True)
        print(f"pathfinder: error: {e}", file=sys.stderr)
        return 1

    print("\nTree structure:")
    print(tree.fmt_tree(str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
