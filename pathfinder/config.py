"""Configuration for building trees from the filesystem.

ScanConfig controls how the filesystem adapter walks a directory: whether
entries are sorted, which entries are skipped, and how deep to go. It has no
effect on the arena tree itself.
"""

from dataclasses import dataclass
from fnmatch import fnmatch
from typing import List, Optional, Set


@dataclass
class ScanConfig:
    """Configuration for a directory walk.

    The defaults reproduce a plain recursive listing: platform listing order,
    hidden entries included, symlinked directories followed, no depth limit.
    """

    # Ordering
    sort_entries: bool = False                 # Sort entries by name before recursing

    # Entry selection
    include_hidden: bool = True                # Include names starting with '.'
    exclude_patterns: Optional[Set[str]] = None  # Glob patterns matched against names

    # Recursion control
    follow_symlinks: bool = True               # Descend into symlinked directories
    max_depth: Optional[int] = None            # Deepest level to populate (root = 0)

    @classmethod
    def deterministic(cls, **kwargs) -> 'ScanConfig':
        """Create config whose output does not depend on listing order."""
        kwargs.setdefault('sort_entries', True)
        return cls(**kwargs)

    def should_include(self, name: str) -> bool:
        """Check if a directory entry with this name should be added.

        Args:
            name: Final path component of the entry

        Returns:
            True if the entry passes the hidden and pattern filters
        """
        if not self.include_hidden and name.startswith('.'):
            return False
        if self.exclude_patterns:
            return not any(fnmatch(name, pattern) for pattern in self.exclude_patterns)
        return True

    def should_descend(self, depth: int) -> bool:
        """Check if the children of a directory at ``depth`` should be listed."""
        if self.max_depth is None:
            return True
        return depth < self.max_depth

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                errors.append("max_depth must be an integer or None")
            elif self.max_depth < 0:
                errors.append("max_depth cannot be negative")

        if self.exclude_patterns is not None:
            if isinstance(self.exclude_patterns, str):
                errors.append("exclude_patterns must be a collection of patterns, not a string")
            elif any(not isinstance(p, str) or not p for p in self.exclude_patterns):
                errors.append("exclude_patterns must contain non-empty strings")

        return errors
