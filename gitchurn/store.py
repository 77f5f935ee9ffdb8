"""Object store adapter: resolve tree and commit ids into plain snapshots."""

from __future__ import annotations

from typing import Protocol

from git import Repo
from git.exc import BadName, BadObject
from git.objects.fun import tree_entries_from_data
from git.util import bin_to_hex, hex_to_bin

from gitchurn.errors import ObjectCorrupt, ObjectNotFound
from gitchurn.logging_config import get_logger
from gitchurn.models import CommitId, DirectorySnapshot, EntryKind, ObjectId, TreeEntry

logger = get_logger(__name__)


class ObjectStore(Protocol):
    """The two lookups the churn engine needs from a version-control backend."""

    def resolve_snapshot(self, oid: ObjectId) -> DirectorySnapshot:
        ...

    def resolve_commit_root(self, commit_id: CommitId) -> ObjectId:
        ...


class GitObjectStore:
    """:class:`ObjectStore` backed by a GitPython repository's object database.

    Reads raw objects through ``repo.odb`` rather than building GitPython
    ``Tree``/``Commit`` objects, which keeps per-lookup overhead to one
    ``cat-file`` round trip and avoids caching parsed trees we never revisit.
    """

    def __init__(self, repo: Repo):
        self.repo = repo

    def _read(self, oid: str, expected_type: bytes) -> bytes:
        try:
            binsha = hex_to_bin(oid)
        except ValueError:
            raise ObjectNotFound(oid, "not a hex object id")
        if len(binsha) != 20:
            raise ObjectNotFound(oid, "not a full object id")
        try:
            stream = self.repo.odb.stream(binsha)
            data = stream.read()
        except (BadObject, BadName, ValueError) as exc:
            raise ObjectNotFound(oid, str(exc))
        if stream.type != expected_type:
            raise ObjectCorrupt(
                oid, f"expected {expected_type.decode()}, found {stream.type.decode(errors='replace')}"
            )
        return data

    def resolve_snapshot(self, oid: ObjectId) -> DirectorySnapshot:
        data = self._read(oid, b"tree")
        try:
            raw_entries = tree_entries_from_data(data)
        except (ValueError, IndexError) as exc:
            raise ObjectCorrupt(oid, f"undecodable tree: {exc}")

        entries = []
        for binsha, mode, name in raw_entries:
            if len(binsha) != 20:
                raise ObjectCorrupt(oid, f"truncated entry {name!r}")
            entries.append(TreeEntry(name=name, oid=bin_to_hex(binsha).decode("ascii"), kind=EntryKind.from_mode(mode)))
        logger.debug("resolved tree %s (%d entries)", oid[:8], len(entries))
        return tuple(entries)

    def resolve_commit_root(self, commit_id: CommitId) -> ObjectId:
        data = self._read(commit_id, b"commit")
        # Commit headers always open with "tree <hex>\n"
        header, _, _ = data.partition(b"\n")
        keyword, _, tree_hex = header.partition(b" ")
        if keyword != b"tree" or len(tree_hex) != 40:
            raise ObjectCorrupt(commit_id, "commit has no tree header")
        return tree_hex.decode("ascii")
