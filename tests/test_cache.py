"""Tests for the DirNode accumulation tree."""

from gitchurn.cache import DirNode


class TestDirNode:
    """Tests for DirNode."""

    def test_get_or_create_child_is_lazy_and_stable(self):
        """A child is created on first request and reused afterwards."""
        node = DirNode()
        assert node.subdirs == {}

        child = node.get_or_create_child("src")
        assert node.subdirs == {"src": child}
        assert node.get_or_create_child("src") is child

    def test_mark_seen_true_only_once(self):
        """mark_seen gates on first registration per node."""
        node = DirNode()
        assert node.mark_seen("a" * 40) is True
        assert node.mark_seen("a" * 40) is False
        assert node.mark_seen("a" * 40) is False
        assert node.mark_seen("b" * 40) is True

    def test_seen_ids_are_per_node(self):
        """The same id can be new at two different paths."""
        root = DirNode()
        left = root.get_or_create_child("left")
        right = root.get_or_create_child("right")
        assert left.mark_seen("c" * 40) is True
        assert right.mark_seen("c" * 40) is True

    def test_record_file_version_deduplicates(self):
        """Re-recording the same content id is a no-op."""
        node = DirNode()
        node.record_file_version("a.txt", "x" * 40)
        node.record_file_version("a.txt", "x" * 40)
        node.record_file_version("a.txt", "y" * 40)
        assert node.file_versions == {"a.txt": {"x" * 40, "y" * 40}}

    def test_same_name_as_file_and_directory(self):
        """Files and subdirectories are stored separately under one name."""
        node = DirNode()
        node.record_file_version("thing", "1" * 40)
        node.get_or_create_child("thing").record_file_version("inner", "2" * 40)
        assert "thing" in node.file_versions
        assert "thing" in node.subdirs

    def test_counts(self):
        """file_count and node_count recurse through the tree."""
        root = DirNode()
        root.record_file_version("README", "1" * 40)
        lib = root.get_or_create_child("lib")
        lib.record_file_version("a.py", "2" * 40)
        lib.get_or_create_child("sub").record_file_version("b.py", "3" * 40)
        assert root.file_count() == 3
        assert root.node_count() == 3
