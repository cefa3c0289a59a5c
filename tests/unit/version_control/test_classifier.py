"""
Unit tests for change classification.
"""

import pytest

from scribe.version_control import (
    Commit,
    FileRecord,
    FileStatus,
    classify,
)


def make_head(*files: FileRecord) -> Commit:
    return Commit(
        hash="abcdef0123456789",
        message="head",
        timestamp="2024-01-01T00:00:00+00:00",
        author="User",
        files=tuple(files),
    )


class TestClassify:
    """Tests for classify."""

    def test_unchanged_file(self) -> None:
        a = FileRecord(id="A", name="a.py", content="x")
        result = classify([a], make_head(a))

        assert result.unchanged == [a]
        assert result.is_clean()
        assert result.summary() == "No changes"

    def test_modified_file(self) -> None:
        """Test that a content change is detected."""
        head = make_head(FileRecord(id="A", name="a.py", content="x"))
        edited = FileRecord(id="A", name="a.py", content="y")
        result = classify([edited], head)

        assert result.modified == [edited]
        assert result.status_of("A") == FileStatus.MODIFIED

    def test_untracked_file(self) -> None:
        head = make_head(FileRecord(id="A", name="a.py", content="x"))
        new = FileRecord(id="B", name="b.py", content="")
        result = classify([head.files[0], new], head)

        assert result.untracked == [new]
        assert result.changed_ids() == ["B"]

    def test_rename_alone_is_unchanged(self) -> None:
        """Test that classification compares content only."""
        head = make_head(FileRecord(id="A", name="a.py", content="x"))
        renamed = FileRecord(id="A", name="renamed.py", content="x")

        assert classify([renamed], head).status_of("A") == FileStatus.UNCHANGED

    def test_deleted_head_file_not_reported(self) -> None:
        """Test that files missing from the working set are not classified."""
        a = FileRecord(id="A", name="a.py", content="x")
        b = FileRecord(id="B", name="b.py", content="y")
        result = classify([a], make_head(a, b))

        assert result.is_clean()
        with pytest.raises(KeyError):
            result.status_of("B")

    def test_partition_keeps_working_set_order(self) -> None:
        head = make_head(
            FileRecord(id="A", name="a.py", content="1"),
            FileRecord(id="C", name="c.py", content="3"),
        )
        working = [
            FileRecord(id="C", name="c.py", content="changed"),
            FileRecord(id="B", name="b.py", content=""),
            FileRecord(id="A", name="a.py", content="changed"),
            FileRecord(id="D", name="d.py", content=""),
        ]
        result = classify(working, head)

        assert [f.id for f in result.modified] == ["C", "A"]
        assert [f.id for f in result.untracked] == ["B", "D"]
        assert [f.id for f in result.changed] == ["C", "A", "B", "D"]


class TestChangeSet:
    """Tests for ChangeSet helpers."""

    def test_pending_excludes_staged(self) -> None:
        head = make_head(FileRecord(id="A", name="a.py", content="x"))
        working = [
            FileRecord(id="A", name="a.py", content="y"),
            FileRecord(id="B", name="b.py", content=""),
        ]
        result = classify(working, head)

        assert [f.id for f in result.pending({"A"})] == ["B"]

    def test_summary_and_format(self) -> None:
        """Test status text with staged markers."""
        head = make_head(FileRecord(id="A", name="a.py", content="x"))
        working = [
            FileRecord(id="A", name="a.py", content="y"),
            FileRecord(id="B", name="b.py", content=""),
        ]
        result = classify(working, head)

        assert result.summary() == "1 modified, 1 untracked"
        text = result.format(staged_ids={"B"})
        assert text.splitlines() == [
            "HEAD abcdef0: 1 modified, 1 untracked",
            "  M a.py",
            " +U b.py",
        ]

    def test_markers(self) -> None:
        assert FileStatus.MODIFIED.marker == "M"
        assert FileStatus.UNTRACKED.marker == "U"
