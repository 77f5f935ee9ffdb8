"""Shared dataclasses for the object model and analyzer outputs."""

from __future__ import annotations

import enum
import json
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

# 40-char lowercase hex SHA, for trees, blobs and commits alike
ObjectId = str
CommitId = str


def _default_serializer(obj: Any) -> Any:
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, enum.Enum):
        return obj.value
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")


def to_json(data: Any, indent: int = 2) -> str:
    if isinstance(data, list):
        serializable = [asdict(item) if hasattr(item, "__dataclass_fields__") else item for item in data]
    elif hasattr(data, "__dataclass_fields__"):
        serializable = asdict(data)
    else:
        serializable = data
    return json.dumps(serializable, indent=indent, default=_default_serializer)


class EntryKind(enum.Enum):
    TREE = "tree"
    BLOB = "blob"
    OTHER = "other"  # symlinks, submodules; never counted

    @classmethod
    def from_mode(cls, mode: int) -> "EntryKind":
        kind = mode >> 12
        if kind == 0o04:
            return cls.TREE
        if kind == 0o10:
            return cls.BLOB
        return cls.OTHER


@dataclass(frozen=True)
class TreeEntry:
    name: str
    oid: ObjectId
    kind: EntryKind


# One directory's complete listing at one point in history, in tree order.
DirectorySnapshot = tuple[TreeEntry, ...]


@dataclass
class FileChurn:
    path: str
    versions: int  # distinct content ids ever seen at this path


@dataclass
class ChurnReport:
    repo: str
    ref: str
    order: str
    reverse: bool
    commits_walked: int
    complete: bool
    error: str | None = None
    truncated: bool = False  # walk stopped at a commit cap
    files: list[FileChurn] = field(default_factory=list)

    @property
    def total_versions(self) -> int:
        return sum(f.versions for f in self.files)


@dataclass
class CommitInfo:
    sha: str
    short_sha: str
    summary: str
    committer: str
    committed_at: datetime
