"""Shared fixtures: an in-memory content-addressed store and real git repos."""

from __future__ import annotations

import hashlib
from collections import Counter

import pytest
from git import Actor, Repo

from gitchurn.errors import ObjectCorrupt, ObjectNotFound
from gitchurn.models import EntryKind, TreeEntry


def _sha(kind: str, payload: str) -> str:
    return hashlib.sha1(f"{kind}\0{payload}".encode()).hexdigest()


class MemoryStore:
    """Content-addressed :class:`ObjectStore` stub that counts every lookup.

    Trees are described as nested dicts: a ``str`` value is file content, a
    ``dict`` value is a subdirectory.
    """

    def __init__(self):
        self.trees: dict[str, tuple[TreeEntry, ...]] = {}
        self.commits: dict[str, str] = {}
        self.snapshot_calls: Counter[str] = Counter()
        self.commit_calls: Counter[str] = Counter()

    def blob_id(self, content: str) -> str:
        return _sha("blob", content)

    def tree(self, layout: dict) -> str:
        entries = []
        for name in sorted(layout):
            value = layout[name]
            if isinstance(value, dict):
                entries.append(TreeEntry(name, self.tree(value), EntryKind.TREE))
            else:
                entries.append(TreeEntry(name, self.blob_id(value), EntryKind.BLOB))
        snapshot = tuple(entries)
        oid = _sha("tree", repr([(e.name, e.oid, e.kind.value) for e in snapshot]))
        self.trees[oid] = snapshot
        return oid

    def commit(self, layout: dict, label: str | None = None) -> str:
        root = self.tree(layout)
        commit_id = _sha("commit", f"{label or len(self.commits)}:{root}")
        self.commits[commit_id] = root
        return commit_id

    def resolve_snapshot(self, oid: str) -> tuple[TreeEntry, ...]:
        self.snapshot_calls[oid] += 1
        if oid in self.commits:
            raise ObjectCorrupt(oid, "expected tree, found commit")
        try:
            return self.trees[oid]
        except KeyError:
            raise ObjectNotFound(oid)

    def resolve_commit_root(self, commit_id: str) -> str:
        self.commit_calls[commit_id] += 1
        try:
            return self.commits[commit_id]
        except KeyError:
            raise ObjectNotFound(commit_id)

    @property
    def total_snapshot_calls(self) -> int:
        return sum(self.snapshot_calls.values())


@pytest.fixture
def store():
    """Fresh call-counting in-memory store."""
    return MemoryStore()


ACTOR = Actor("Test Author", "author@example.com")


class RepoBuilder:
    """Create commits in a real repository with GitPython."""

    def __init__(self, path):
        self.path = path
        self.repo = Repo.init(path)
        self._day = 0

    def commit(self, files: dict[str, str | None], message: str = "change") -> str:
        """Write (or with ``None`` delete) *files* and commit; return the sha."""
        to_add, to_remove = [], []
        for rel, content in files.items():
            target = self.path / rel
            if content is None:
                to_remove.append(rel)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content)
                to_add.append(rel)
        if to_add:
            self.repo.index.add(to_add)
        if to_remove:
            self.repo.index.remove(to_remove, working_tree=True)
        self._day += 1
        date = f"2024-01-{self._day:02d}T12:00:00"
        commit = self.repo.index.commit(
            message, author=ACTOR, committer=ACTOR, author_date=date, commit_date=date
        )
        return commit.hexsha


@pytest.fixture
def git_repo(tmp_path):
    """Empty git repository wrapped in a :class:`RepoBuilder`."""
    builder = RepoBuilder(tmp_path / "repo")
    yield builder
    builder.repo.close()
