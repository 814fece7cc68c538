"""Tests for building trees from the filesystem.

Uses temporary directories created by conftest.create_test_tree().
"""

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pathfinder import (
    FileSystemTreeBuilder,
    RootAlreadySetError,
    ScanConfig,
    Tree,
    build_tree,
    build_tree_from_path,
    display_name,
    render_path,
)

SORTED_RENDERING = (
    "project\n"
    "├── dir1\n"
    "│   ├── file3.txt\n"
    "│   ├── file4.py\n"
    "│   └── subdir1\n"
    "│       └── file5.txt\n"
    "├── dir2\n"
    "│   └── file6.txt\n"
    "├── file1.txt\n"
    "└── file2.py\n"
)

ALL_NAMES = {
    "project", "dir1", "dir2", "subdir1",
    "file1.txt", "file2.py", "file3.txt", "file4.py", "file5.txt", "file6.txt",
}


def names(tree):
    return [tree.get(h) for h in tree.dfs()]


def remove_chain(root):
    """Remove a chain of single ``d`` directories below ``root`` bottom-up."""
    path = root
    while (path / "d").is_dir():
        path = path / "d"
    while path != root:
        os.rmdir(path)
        path = path.parent


class TestDisplayName:
    """Names shown for paths."""

    def test_final_component(self):
        assert display_name("some/dir/file.txt") == "file.txt"
        assert display_name(Path("some/dir")) == "dir"

    def test_root_path(self):
        assert display_name("/") == "/"

    def test_current_dir(self):
        assert display_name(".") == "."

    def test_parent_reference(self):
        assert display_name(os.path.join("a", "..")) == os.path.join("a", "..")


class TestBuildTreeFromPath:
    """The recursive walk."""

    def test_sorted_walk_renders(self, test_dir):
        tree = Tree()
        root = build_tree_from_path(tree, test_dir, config=ScanConfig(sort_entries=True))
        assert root == tree.root
        assert tree.fmt_tree(str) == SORTED_RENDERING

    def test_unsorted_walk_finds_everything(self, test_dir):
        tree = Tree()
        build_tree_from_path(tree, test_dir)
        assert len(tree) == 10
        assert set(names(tree)) == ALL_NAMES

    def test_parent_links_follow_directories(self, test_dir):
        tree = Tree()
        build_tree_from_path(tree, test_dir)
        by_name = {tree.get(h): h for h in tree.dfs()}
        assert tree.parent(by_name["file5.txt"]) == by_name["subdir1"]
        assert tree.parent(by_name["subdir1"]) == by_name["dir1"]
        assert tree.parent(by_name["dir1"]) == tree.root
        assert tree.parent(tree.root) is None

    def test_attach_under_existing_parent(self, test_dir):
        tree = Tree()
        top = tree.set_root("workspace")
        node = build_tree_from_path(tree, test_dir / "dir2", parent=top)
        assert tree.parent(node) == top
        assert tree.fmt_tree() == "workspace\n└── dir2\n    └── file6.txt\n"

    def test_second_root_rejected(self, test_dir):
        tree = Tree()
        tree.set_root("existing")
        with pytest.raises(RootAlreadySetError):
            build_tree_from_path(tree, test_dir)

    def test_file_as_root(self, test_dir):
        tree = Tree()
        build_tree_from_path(tree, test_dir / "file1.txt")
        assert tree.fmt_tree() == "file1.txt\n"

    def test_empty_directory(self, test_dir):
        (test_dir / "empty").mkdir()
        tree = Tree()
        build_tree_from_path(tree, test_dir / "empty")
        assert tree.fmt_tree() == "empty\n"


class TestScanOptions:
    """ScanConfig options applied during the walk."""

    def test_max_depth(self, test_dir):
        tree = build_tree(test_dir, max_depth=1, sort_entries=True)
        assert names(tree) == ["project", "dir1", "dir2", "file1.txt", "file2.py"]

    def test_max_depth_zero(self, test_dir):
        tree = build_tree(test_dir, max_depth=0)
        assert names(tree) == ["project"]

    def test_exclude_patterns(self, test_dir):
        tree = build_tree(test_dir, exclude_patterns={"*.py", "subdir*"})
        assert set(names(tree)) == ALL_NAMES - {"file2.py", "file4.py", "subdir1", "file5.txt"}

    def test_hidden_entries(self, test_dir):
        (test_dir / ".hidden").write_text("secret")
        (test_dir / ".cache").mkdir()
        (test_dir / ".cache" / "blob").write_text("data")

        with_hidden = build_tree(test_dir)
        assert {".hidden", ".cache", "blob"} <= set(names(with_hidden))

        without_hidden = build_tree(test_dir, include_hidden=False)
        assert set(names(without_hidden)) == ALL_NAMES

    def test_symlinked_directory(self, test_dir):
        link = test_dir / "link_to_dir2"
        try:
            os.symlink(test_dir / "dir2", link, target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported here")

        followed = build_tree(test_dir)
        by_name = {followed.get(h): h for h in followed.dfs()}
        assert [followed.get(c) for c in followed.children(by_name["link_to_dir2"])] == ["file6.txt"]

        not_followed = build_tree(test_dir, follow_symlinks=False)
        by_name = {not_followed.get(h): h for h in not_followed.dfs()}
        assert list(not_followed.children(by_name["link_to_dir2"])) == []

    def test_symlinked_root(self, test_dir):
        link = test_dir.parent / "link_to_project"
        try:
            os.symlink(test_dir, link, target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported here")

        assert build_tree(link, follow_symlinks=False).fmt_tree() == "link_to_project\n"

        followed = build_tree(link, sort_entries=True)
        assert len(followed) == 10
        assert followed.get(followed.root) == "link_to_project"

    def test_builder_counters(self, test_dir):
        builder = FileSystemTreeBuilder(ScanConfig.deterministic())
        tree = builder.build(test_dir)
        assert builder.nodes_added == len(tree) == 10
        assert builder.directories_scanned == 4
        assert tree.fmt_tree() == SORTED_RENDERING

    def test_chain_deeper_than_recursion_limit(self, test_dir):
        depth = sys.getrecursionlimit() + 50
        root = test_dir / "deep"
        root.mkdir()
        cwd = os.getcwd()
        os.chdir(root)
        try:
            for _ in range(depth):
                os.mkdir("d")
                os.chdir("d")
        finally:
            os.chdir(cwd)

        try:
            builder = FileSystemTreeBuilder()
            tree = builder.build(root)
            assert len(tree) == builder.nodes_added == depth + 1
            assert builder.directories_scanned == depth + 1
            last = tree.dfs()[-1]
            assert tree.depth(last) == depth
            assert tree.is_leaf(last)
            assert tree.fmt_tree().endswith("    └── d\n")
        finally:
            remove_chain(root)


class TestErrorPropagation:
    """I/O errors abort the walk instead of being skipped."""

    def test_unreadable_subdirectory_raises(self, test_dir):
        real_scandir = os.scandir

        def fake_scandir(path):
            if Path(path).name == "subdir1":
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        with patch("pathfinder.adapters.filesystem.os.scandir", side_effect=fake_scandir):
            with pytest.raises(PermissionError):
                build_tree(test_dir)

    def test_unreadable_root_raises(self, test_dir):
        with patch("pathfinder.adapters.filesystem.os.scandir",
                   side_effect=PermissionError("Access denied")):
            with pytest.raises(PermissionError):
                build_tree_from_path(Tree(), test_dir)

    def test_missing_path(self, test_dir):
        with pytest.raises(FileNotFoundError):
            build_tree(test_dir / "does-not-exist")


class TestHighLevelApi:
    """build_tree() and render_path()."""

    def test_render_path(self, test_dir):
        assert render_path(test_dir, sort_entries=True) == SORTED_RENDERING

    def test_render_path_with_config(self, test_dir):
        assert render_path(test_dir, ScanConfig.deterministic()) == SORTED_RENDERING

    def test_overrides_do_not_modify_config(self, test_dir):
        config = ScanConfig()
        build_tree(test_dir, config, sort_entries=True)
        assert config.sort_entries is False

    def test_invalid_config(self, test_dir):
        with pytest.raises(ValueError, match="max_depth cannot be negative"):
            build_tree(test_dir, max_depth=-1)

    def test_unknown_override(self, test_dir):
        with pytest.raises(TypeError):
            build_tree(test_dir, colour=True)
