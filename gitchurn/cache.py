"""Path-keyed accumulation tree for per-directory version sets."""

from __future__ import annotations

from gitchurn.models import ObjectId


class DirNode:
    """Everything observed so far at one directory path.

    Each node owns its children exclusively; the tree mirrors the directory
    hierarchy, not the commit graph. Nothing is ever removed, so memory grows
    with distinct paths and distinct contents, never with history length.
    """

    __slots__ = ("seen_snapshot_ids", "file_versions", "subdirs")

    def __init__(self) -> None:
        self.seen_snapshot_ids: set[ObjectId] = set()
        self.file_versions: dict[str, set[ObjectId]] = {}
        self.subdirs: dict[str, DirNode] = {}

    def get_or_create_child(self, name: str) -> DirNode:
        child = self.subdirs.get(name)
        if child is None:
            child = self.subdirs[name] = DirNode()
        return child

    def record_file_version(self, name: str, content_id: ObjectId) -> None:
        versions = self.file_versions.get(name)
        if versions is None:
            versions = self.file_versions[name] = set()
        versions.add(content_id)

    def mark_seen(self, snapshot_id: ObjectId) -> bool:
        """Register *snapshot_id* here; True only the first time it is seen."""
        if snapshot_id in self.seen_snapshot_ids:
            return False
        self.seen_snapshot_ids.add(snapshot_id)
        return True

    def file_count(self) -> int:
        return len(self.file_versions) + sum(child.file_count() for child in self.subdirs.values())

    def node_count(self) -> int:
        return 1 + sum(child.node_count() for child in self.subdirs.values())

    def __repr__(self) -> str:
        return (
            f"DirNode(files={len(self.file_versions)}, subdirs={len(self.subdirs)}, "
            f"seen={len(self.seen_snapshot_ids)})"
        )
