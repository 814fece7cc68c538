"""Shared fixtures for the pathfinder test suite."""

import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pathfinder import Tree


def build_sample_tree():
    """Build the sample tree used throughout the tests.

    Structure:
    root
    ├── a
    │   ├── a1
    │   └── a2
    └── b
        └── b1
    """
    tree = Tree()
    ids = {}
    ids["root"] = tree.set_root("root")
    ids["a"] = tree.add_child(ids["root"], "a")
    ids["a1"] = tree.add_child(ids["a"], "a1")
    ids["a2"] = tree.add_child(ids["a"], "a2")
    ids["b"] = tree.add_child(ids["root"], "b")
    ids["b1"] = tree.add_child(ids["b"], "b1")
    return tree, ids


def build_chain(length):
    """Build a tree that is a single path of ``length`` nodes."""
    tree = Tree()
    current = tree.set_root(0)
    for i in range(1, length):
        current = tree.add_child(current, i)
    return tree


def create_test_tree(base_dir: Path) -> None:
    """Create a test directory structure.

    Structure:
    base_dir/
    ├── dir1/
    │   ├── file3.txt
    │   ├── file4.py
    │   └── subdir1/
    │       └── file5.txt
    ├── dir2/
    │   └── file6.txt
    ├── file1.txt
    └── file2.py
    """
    (base_dir / "dir1").mkdir()
    (base_dir / "dir1" / "subdir1").mkdir()
    (base_dir / "dir2").mkdir()

    (base_dir / "file1.txt").write_text("content1")
    (base_dir / "file2.py").write_text("# python file")
    (base_dir / "dir1" / "file3.txt").write_text("content3")
    (base_dir / "dir1" / "file4.py").write_text("# another python file")
    (base_dir / "dir1" / "subdir1" / "file5.txt").write_text("content5")
    (base_dir / "dir2" / "file6.txt").write_text("content6")


@pytest.fixture
def sample_tree():
    """The sample tree and a dict of its handles keyed by label."""
    return build_sample_tree()


@pytest.fixture
def chain():
    """Factory for single-path trees."""
    return build_chain


@pytest.fixture
def test_dir():
    """Temporary directory populated by create_test_tree()."""
    tmpdir = tempfile.mkdtemp(prefix='pathfinder_test_')
    base = Path(tmpdir) / "project"
    base.mkdir()
    create_test_tree(base)
    yield base
    shutil.rmtree(tmpdir, ignore_errors=True)
