"""Enumerate the commits reachable from a ref, in a configurable order."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass

from git import Commit, Repo
from git.exc import GitCommandError

from gitchurn.errors import TraversalFailure
from gitchurn.logging_config import get_logger
from gitchurn.models import CommitId
from gitchurn.repo import resolve_ref

logger = get_logger(__name__)


class TraversalOrder(enum.Enum):
    INSERTION = "insertion"  # whatever order rev-list produces by default
    TOPOLOGICAL = "topological"
    CHRONOLOGICAL = "chronological"


# Maps each order onto the ``git rev-list`` flag GitPython should pass.
_ORDER_FLAGS = {
    TraversalOrder.INSERTION: None,
    TraversalOrder.TOPOLOGICAL: "topo_order",
    TraversalOrder.CHRONOLOGICAL: "date_order",
}


@dataclass
class WalkConfig:
    ref: str = "HEAD"
    order: TraversalOrder = TraversalOrder.INSERTION
    reverse: bool = False
    max_count: int | None = None

    @classmethod
    def from_flags(
        cls,
        ref: str = "HEAD",
        topo_order: bool = False,
        date_order: bool = False,
        reverse: bool = False,
        max_count: int | None = None,
    ) -> "WalkConfig":
        """Build a config from rev-list style boolean flags; topo order wins over date order."""
        if topo_order:
            order = TraversalOrder.TOPOLOGICAL
        elif date_order:
            order = TraversalOrder.CHRONOLOGICAL
        else:
            order = TraversalOrder.INSERTION
        return cls(ref=ref, order=order, reverse=reverse, max_count=max_count)

    def rev_list_kwargs(self) -> dict:
        kwargs: dict = {}
        flag = _ORDER_FLAGS[self.order]
        if flag:
            kwargs[flag] = True
        if self.reverse:
            kwargs["reverse"] = True
        if self.max_count is not None:
            kwargs["max_count"] = self.max_count
        return kwargs


def iter_commits(repo: Repo, config: WalkConfig | None = None) -> Iterator[Commit]:
    """Yield every commit reachable from ``config.ref`` exactly once.

    The sequence is lazy: commits are parsed from ``git rev-list`` output as
    they are consumed. A ref that does not resolve, or a rev-list process that
    fails part-way, raises :class:`TraversalFailure`.
    """
    config = config or WalkConfig()
    start = resolve_ref(repo, config.ref)
    kwargs = config.rev_list_kwargs()
    logger.debug("walking %s (%s) with %s", config.ref, start[:8], kwargs)
    try:
        yield from repo.iter_commits(start, **kwargs)
    except GitCommandError as exc:
        raise TraversalFailure(config.ref, str(exc).strip())


def walk_commit_ids(repo: Repo, config: WalkConfig | None = None) -> Iterator[CommitId]:
    """Like :func:`iter_commits` but yield only hex commit ids."""
    for commit in iter_commits(repo, config):
        yield commit.hexsha
