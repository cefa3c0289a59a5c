"""
Unit tests for file records and commits.
"""

import dataclasses

import pytest

from scribe.version_control import (
    Commit,
    FileRecord,
    compute_commit_hash,
    create_file_id,
)


class TestFileRecord:
    """Tests for FileRecord."""

    def test_with_content_preserves_id_and_name(self) -> None:
        """Test that replacing content keeps identity."""
        record = FileRecord(id="f1", name="main.py", content="x")
        updated = record.with_content("y")

        assert updated.id == "f1"
        assert updated.name == "main.py"
        assert updated.content == "y"
        assert record.content == "x"

    def test_with_name_preserves_id_and_content(self) -> None:
        record = FileRecord(id="f1", name="main.py", content="x")
        renamed = record.with_name("app.py")

        assert renamed.id == "f1"
        assert renamed.content == "x"
        assert renamed.name == "app.py"

    def test_records_are_immutable(self) -> None:
        """Test that a record cannot be mutated in place."""
        record = FileRecord(id="f1", name="main.py", content="x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.content = "z"  # type: ignore[misc]

    def test_default_language(self) -> None:
        assert FileRecord(id="f1", name="a.py", content="").language == "python"


class TestCommit:
    """Tests for Commit."""

    def _commit(self) -> Commit:
        files = (
            FileRecord(id="a", name="a.py", content="1"),
            FileRecord(id="b", name="b.py", content="2"),
        )
        return Commit(
            hash="0123456789abcdef",
            message="msg",
            timestamp="2024-01-01T00:00:00+00:00",
            author="User",
            files=files,
            parent_hash="fedcba",
        )

    def test_short_hash(self) -> None:
        assert self._commit().short_hash == "0123456"

    def test_file_lookup(self) -> None:
        """Test file map and get_file."""
        commit = self._commit()

        assert set(commit.file_map()) == {"a", "b"}
        assert commit.get_file("b").content == "2"
        assert commit.get_file("missing") is None
        assert commit.file_ids() == ("a", "b")

    def test_serialization(self) -> None:
        """Test commit to/from JSON."""
        commit = self._commit()
        restored = Commit.from_json(commit.to_json())

        assert restored == commit
        assert restored.files[0].name == "a.py"
        assert restored.parent_hash == "fedcba"

    def test_commit_is_immutable(self) -> None:
        commit = self._commit()
        with pytest.raises(dataclasses.FrozenInstanceError):
            commit.message = "other"  # type: ignore[misc]
        assert isinstance(commit.files, tuple)


class TestIdentifiers:
    """Tests for id and hash generation."""

    def test_file_ids_are_unique(self) -> None:
        ids = {create_file_id() for _ in range(200)}
        assert len(ids) == 200

    def test_commit_hash_is_deterministic(self) -> None:
        """Test that the hash depends only on commit content."""
        files = [FileRecord(id="a", name="a.py", content="1")]
        h1 = compute_commit_hash("m", "User", "t", files, "p")
        h2 = compute_commit_hash("m", "User", "t", list(files), "p")

        assert h1 == h2
        assert len(h1) == 40

    def test_commit_hash_covers_content(self) -> None:
        files = [FileRecord(id="a", name="a.py", content="1")]
        changed = [FileRecord(id="a", name="a.py", content="2")]

        assert compute_commit_hash("m", "U", "t", files, "p") != compute_commit_hash(
            "m", "U", "t", changed, "p"
        )
        assert compute_commit_hash("m", "U", "t", files, "p") != compute_commit_hash(
            "m", "U", "t", files, "q"
        )

    def test_commit_hash_length(self) -> None:
        files = [FileRecord(id="a", name="a.py", content="1")]
        assert len(compute_commit_hash("m", "U", "t", files, None, length=12)) == 12
