"""
Unit tests for commit history.
"""

import pytest

from scribe.version_control import (
    Commit,
    CommitHistory,
    FileRecord,
    VersionControlError,
)

FILES = (FileRecord(id="A", name="a.py", content="x"),)


def make_commit(commit_hash: str, parent: str = None) -> Commit:
    return Commit(
        hash=commit_hash,
        message=f"commit {commit_hash[:3]}",
        timestamp="2024-01-01T00:00:00+00:00",
        author="User",
        files=FILES,
        parent_hash=parent,
    )


@pytest.fixture
def history() -> CommitHistory:
    h = CommitHistory(make_commit("aaa111"))
    h.prepend(make_commit("bbb222", "aaa111"))
    h.prepend(make_commit("bbc333", "bbb222"))
    return h


class TestCommitHistory:
    """Tests for CommitHistory."""

    def test_newest_first(self, history: CommitHistory) -> None:
        assert [c.hash for c in history] == ["bbc333", "bbb222", "aaa111"]
        assert history.head.hash == "bbc333"
        assert history.root.hash == "aaa111"
        assert len(history) == 3

    def test_prepend_requires_parent_head(self, history: CommitHistory) -> None:
        """Test that a commit not descending from HEAD is refused."""
        with pytest.raises(VersionControlError):
            history.prepend(make_commit("ccc444", "aaa111"))
        assert len(history) == 3

    def test_log_limit(self, history: CommitHistory) -> None:
        assert [c.hash for c in history.log(2)] == ["bbc333", "bbb222"]
        assert len(history.log()) == 3


class TestFind:
    """Tests for reference resolution."""

    def test_head_refs(self, history: CommitHistory) -> None:
        assert history.find("HEAD").hash == "bbc333"
        assert history.find("HEAD~1").hash == "bbb222"
        assert history.find("HEAD~2").hash == "aaa111"
        assert history.find("HEAD~3") is None
        assert history.find("HEAD~x") is None

    def test_prefix(self, history: CommitHistory) -> None:
        assert history.find("aaa").hash == "aaa111"
        assert history.find("bbc333").hash == "bbc333"

    def test_ambiguous_prefix(self, history: CommitHistory) -> None:
        assert history.find("bb") is None

    def test_missing_and_empty(self, history: CommitHistory) -> None:
        assert history.find("zzz") is None
        assert history.find("") is None
