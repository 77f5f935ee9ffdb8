"""Churn aggregation engine.

Folds one root tree per commit into a :class:`~gitchurn.cache.DirNode` tree.
Every directory entry is gated on ``mark_seen`` at its own path, so a subtree
whose exact content was already folded at that path is skipped without being
resolved. Total work is therefore bounded by the number of distinct
(path, tree) pairs in history rather than commits times repository size.

The root itself is not gated: each commit's top-level entries are iterated
again even when the root tree is unchanged. That repetition is bounded by the
width of the top-level directory.
"""

from __future__ import annotations

from gitchurn.cache import DirNode
from gitchurn.errors import EngineSealed
from gitchurn.logging_config import get_logger
from gitchurn.models import CommitId, DirectorySnapshot, EntryKind, FileChurn, ObjectId
from gitchurn.store import ObjectStore

logger = get_logger(__name__)

PATH_SEP = "/"


def _path_sort_key(row: FileChurn) -> bytes:
    # Byte-wise ordering; surrogateescape keeps non-UTF-8 names sortable.
    return row.path.encode("utf-8", "surrogateescape")


class ChurnEngine:
    """Accumulates distinct content versions per path across many commits."""

    def __init__(self, store: ObjectStore):
        self.store = store
        self.root = DirNode()
        self.commits_folded = 0
        self.snapshots_resolved = 0
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def fold_commit(self, commit_id: CommitId) -> None:
        """Fold the root tree of *commit_id*.

        Store errors propagate unchanged. Whatever was folded before the
        failure stays in the cache, but the commit is not counted.
        """
        self._check_open()
        root_id = self.store.resolve_commit_root(commit_id)
        self._fold_root(root_id)
        self.commits_folded += 1

    def fold_root(self, snapshot_id: ObjectId) -> None:
        """Fold a root tree directly, without going through a commit."""
        self._check_open()
        self._fold_root(snapshot_id)

    def _fold_root(self, snapshot_id: ObjectId) -> None:
        self._fold(self.root, self._resolve(snapshot_id))

    def _resolve(self, oid: ObjectId) -> DirectorySnapshot:
        snapshot = self.store.resolve_snapshot(oid)
        self.snapshots_resolved += 1
        return snapshot

    def _fold(self, node: DirNode, snapshot: DirectorySnapshot) -> None:
        for entry in snapshot:
            if entry.kind is EntryKind.TREE:
                child = node.get_or_create_child(entry.name)
                if child.mark_seen(entry.oid):
                    self._fold(child, self._resolve(entry.oid))
            elif entry.kind is EntryKind.BLOB:
                node.record_file_version(entry.name, entry.oid)

    def _check_open(self) -> None:
        if self._sealed:
            raise EngineSealed()

    def flatten(self, min_versions: int = 1) -> list[FileChurn]:
        """Return one row per file path ever seen, sorted by path.

        Directories never produce rows of their own. Calling this seals the
        engine; later calls return the same rows.
        """
        self._sealed = True
        rows: list[FileChurn] = []
        stack: list[tuple[str, DirNode]] = [("", self.root)]
        while stack:
            prefix, node = stack.pop()
            for name, versions in node.file_versions.items():
                if len(versions) >= min_versions:
                    rows.append(FileChurn(path=prefix + name, versions=len(versions)))
            for name, child in node.subdirs.items():
                stack.append((prefix + name + PATH_SEP, child))
        rows.sort(key=_path_sort_key)
        logger.debug(
            "flattened %d file(s) from %d director(ies), %d tree resolution(s)",
            len(rows),
            self.root.node_count(),
            self.snapshots_resolved,
        )
        return rows
