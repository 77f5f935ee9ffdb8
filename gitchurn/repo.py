"""Thin helpers for opening a repo and resolving refs."""

from __future__ import annotations

from pathlib import Path

from git import InvalidGitRepositoryError, Repo
from git.exc import BadName, NoSuchPathError

from gitchurn.errors import TraversalFailure


def open_repo(path: str | Path = ".") -> Repo:
    """Open a git repository at *path* (or any of its parents)."""
    try:
        repo = Repo(str(path), search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        raise ValueError(f"No git repository found at or above: {path}")
    return repo


def resolve_ref(repo: Repo, ref: str = "HEAD") -> str:
    """Return the hex sha of the commit *ref* points at."""
    try:
        obj = repo.rev_parse(ref)
    except (BadName, ValueError) as exc:
        raise TraversalFailure(ref, f"cannot resolve reference: {exc}")
    while obj.type == "tag":
        obj = obj.object
    if obj.type != "commit":
        raise TraversalFailure(ref, f"reference points at a {obj.type}, not a commit")
    return obj.hexsha


if __name__ == "__main__":
    import sys

    path = sys.argv[1] if len(sys.argv) > 1 else "."
    r = open_repo(path)
    print(f"Repo: {r.working_dir}")
    print(f"HEAD: {resolve_ref(r)}")
