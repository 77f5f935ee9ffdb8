"""Tests for history walking."""

import pytest

from gitchurn.errors import TraversalFailure
from gitchurn.walker import TraversalOrder, WalkConfig, iter_commits, walk_commit_ids


class TestWalkConfig:
    """Flag handling for WalkConfig."""

    def test_defaults(self):
        config = WalkConfig()
        assert config.ref == "HEAD"
        assert config.order is TraversalOrder.INSERTION
        assert config.rev_list_kwargs() == {}

    def test_topo_wins_over_date(self):
        """Both flags given: topological order is used."""
        config = WalkConfig.from_flags(topo_order=True, date_order=True)
        assert config.order is TraversalOrder.TOPOLOGICAL

    def test_rev_list_kwargs(self):
        """Each setting becomes the matching rev-list option."""
        config = WalkConfig.from_flags(date_order=True, reverse=True, max_count=5)
        assert config.rev_list_kwargs() == {"date_order": True, "reverse": True, "max_count": 5}
        topo = WalkConfig(order=TraversalOrder.TOPOLOGICAL)
        assert topo.rev_list_kwargs() == {"topo_order": True}


class TestWalk:
    """Walking a real repository."""

    @pytest.fixture
    def history(self, git_repo):
        shas = [git_repo.commit({"f.txt": str(i)}, message=f"commit {i}") for i in range(4)]
        return git_repo.repo, shas

    def test_visits_every_commit_once(self, history):
        """Default order is newest first, every commit exactly once."""
        repo, shas = history
        assert list(walk_commit_ids(repo)) == list(reversed(shas))

    @pytest.mark.parametrize("order", list(TraversalOrder))
    def test_reverse_is_oldest_first(self, history, order):
        """Reversing any order on a linear history gives creation order."""
        repo, shas = history
        assert list(walk_commit_ids(repo, WalkConfig(order=order, reverse=True))) == shas

    def test_max_count(self, history):
        repo, shas = history
        assert list(walk_commit_ids(repo, WalkConfig(max_count=2))) == [shas[3], shas[2]]

    def test_start_from_older_ref(self, history):
        """Only ancestors of the start ref are visited."""
        repo, shas = history
        assert list(walk_commit_ids(repo, WalkConfig(ref=shas[1]))) == [shas[1], shas[0]]

    def test_iter_commits_yields_commit_objects(self, history):
        repo, shas = history
        summaries = [c.summary for c in iter_commits(repo)]
        assert summaries == ["commit 3", "commit 2", "commit 1", "commit 0"]

    def test_bad_ref(self, history):
        """An unresolvable ref raises TraversalFailure."""
        repo, _ = history
        with pytest.raises(TraversalFailure) as excinfo:
            list(walk_commit_ids(repo, WalkConfig(ref="no-such-branch")))
        assert excinfo.value.ref == "no-such-branch"

    def test_empty_repository(self, git_repo):
        """A repository with no commits cannot be walked."""
        with pytest.raises(TraversalFailure):
            list(walk_commit_ids(git_repo.repo))
