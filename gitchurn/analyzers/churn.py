"""Count distinct content versions per file path across a whole history."""

from __future__ import annotations

import sys
from pathlib import Path

from git import Repo

from gitchurn.engine import ChurnEngine
from gitchurn.errors import GitChurnError
from gitchurn.logging_config import get_logger
from gitchurn.models import ChurnReport, to_json
from gitchurn.repo import open_repo
from gitchurn.store import GitObjectStore, ObjectStore
from gitchurn.walker import WalkConfig, walk_commit_ids

logger = get_logger(__name__)


def get_file_churn(
    repo: Repo,
    config: WalkConfig | None = None,
    store: ObjectStore | None = None,
    min_versions: int = 1,
    progress_every: int | None = None,
    partial: bool = False,
) -> ChurnReport:
    """Return a :class:`ChurnReport` with one row per file path in history.

    A path's count is the number of *distinct* blob ids ever seen at it, so a
    file edited and then reverted counts two versions, not three touches.

    Parameters
    ----------
    repo:
        Open GitPython Repo object.
    config:
        Which ref to start from and in what order to walk. The order never
        changes the result, only the pacing of progress messages. A
        ``max_count`` cap marks the report ``truncated`` and not complete.
    store:
        Object store to resolve trees through (default: the repo's own odb).
    min_versions:
        Drop rows whose count is below this.
    progress_every:
        Log a progress line every N folded commits.
    partial:
        On a store or traversal error (or Ctrl-C), stop walking and return
        what has been folded so far with ``complete=False`` instead of
        raising.
    """
    config = config or WalkConfig()
    engine = ChurnEngine(store or GitObjectStore(repo))
    error: str | None = None

    commit_id = None
    try:
        for commit_id in walk_commit_ids(repo, config):
            engine.fold_commit(commit_id)
            if progress_every and engine.commits_folded % progress_every == 0:
                logger.info(
                    "folded %d commits, %d tree resolutions so far",
                    engine.commits_folded,
                    engine.snapshots_resolved,
                )
            commit_id = None
    except GitChurnError as exc:
        where = f" at commit {commit_id}" if commit_id else ""
        logger.error("churn walk failed%s: %s", where, exc)
        if not partial:
            raise
        error = f"{exc}{where}"
    except KeyboardInterrupt:
        if not partial:
            raise
        logger.warning(
            "interrupted after %d commits%s; reporting partial result",
            engine.commits_folded,
            f" (stopped inside commit {commit_id}, which may be partly folded)" if commit_id else "",
        )
        error = "interrupted"

    files = engine.flatten(min_versions=min_versions)
    # A cap on the walk means older history was never folded
    truncated = config.max_count is not None and engine.commits_folded >= config.max_count
    logger.info(
        "%d commits folded, %d files, %d tree resolutions",
        engine.commits_folded,
        len(files),
        engine.snapshots_resolved,
    )
    return ChurnReport(
        repo=str(repo.working_dir),
        ref=config.ref,
        order=config.order.value,
        reverse=config.reverse,
        commits_walked=engine.commits_folded,
        complete=error is None and not truncated,
        error=error,
        truncated=truncated,
        files=files,
    )


if __name__ == "__main__":
    repo_path = sys.argv[1] if len(sys.argv) > 1 else "."
    ref_arg = sys.argv[2] if len(sys.argv) > 2 else "HEAD"

    r = open_repo(Path(repo_path))
    report = get_file_churn(r, WalkConfig(ref=ref_arg))
    print(f"Churn for '{ref_arg}' over {report.commits_walked} commits ({len(report.files)} files):\n")
    print(to_json(report))
