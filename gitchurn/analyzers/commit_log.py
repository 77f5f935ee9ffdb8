"""List the commits a churn walk would visit, rev-list style."""

from __future__ import annotations

import sys
from pathlib import Path

from git import Repo

from gitchurn.models import CommitInfo, to_json
from gitchurn.repo import open_repo
from gitchurn.walker import WalkConfig, iter_commits


def get_commit_log(repo: Repo, config: WalkConfig | None = None) -> list[CommitInfo]:
    """Return a :class:`CommitInfo` for each commit reachable from ``config.ref``.

    Parameters
    ----------
    repo:
        Open GitPython Repo object.
    config:
        Start ref, traversal order, reversal and commit cap.
    """
    results: list[CommitInfo] = []
    for commit in iter_commits(repo, config):
        results.append(
            CommitInfo(
                sha=commit.hexsha,
                short_sha=commit.hexsha[:8],
                summary=str(commit.summary),
                committer=commit.committer.name or "<Unknown>",
                committed_at=commit.committed_datetime,
            )
        )
    return results


if __name__ == "__main__":
    repo_path = sys.argv[1] if len(sys.argv) > 1 else "."
    ref_arg = sys.argv[2] if len(sys.argv) > 2 else "HEAD"
    max_arg = int(sys.argv[3]) if len(sys.argv) > 3 else 20

    r = open_repo(Path(repo_path))
    log = get_commit_log(r, WalkConfig(ref=ref_arg, max_count=max_arg))
    print(f"Showing {len(log)} commits reachable from '{ref_arg}':\n")
    print(to_json(log))
