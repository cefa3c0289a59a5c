"""
Diff computation for comparing snapshots.

Compares two lists of file records (two commits, or a commit and the live
working set) by file id.
"""

import difflib
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .records import FileRecord


class ChangeType(str, Enum):
    """Type of change in a diff."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    RENAMED = "renamed"


@dataclass
class FileChange:
    """Represents a change to a single file."""

    change_type: ChangeType
    old: Optional[FileRecord]
    new: Optional[FileRecord]

    @property
    def file_id(self) -> str:
        record = self.new or self.old
        assert record is not None
        return record.id

    def summary(self) -> str:
        """Get a one-line summary of this change."""
        if self.change_type == ChangeType.ADDED:
            assert self.new is not None
            return f"A {self.new.name}"
        elif self.change_type == ChangeType.REMOVED:
            assert self.old is not None
            return f"D {self.old.name}"
        elif self.change_type == ChangeType.RENAMED:
            assert self.old is not None and self.new is not None
            return f"R {self.old.name} -> {self.new.name}"
        else:
            assert self.old is not None and self.new is not None
            if self.old.name != self.new.name:
                return f"M {self.old.name} -> {self.new.name}"
            return f"M {self.new.name}"

    def unified_diff(self, context: int = 3) -> str:
        """Render the content change as a unified diff."""
        old_lines = self.old.content.splitlines(keepends=True) if self.old else []
        new_lines = self.new.content.splitlines(keepends=True) if self.new else []
        old_name = f"a/{self.old.name}" if self.old else "/dev/null"
        new_name = f"b/{self.new.name}" if self.new else "/dev/null"
        lines = difflib.unified_diff(
            old_lines, new_lines, fromfile=old_name, tofile=new_name, n=context
        )
        # Lines without a trailing newline would run together
        return "".join(line if line.endswith("\n") else line + "\n" for line in lines)


@dataclass
class SnapshotDiff:
    """Complete diff between two snapshots."""

    from_ref: str
    to_ref: str
    changes: List[FileChange]

    def has_changes(self) -> bool:
        return len(self.changes) > 0

    def count_by_type(self) -> Dict[str, int]:
        """Count changes by type."""
        counts = {change_type.value: 0 for change_type in ChangeType}
        for change in self.changes:
            counts[change.change_type.value] += 1
        return counts

    def summary(self) -> str:
        """Generate a summary of the diff."""
        if not self.has_changes():
            return "No changes"

        counts = self.count_by_type()
        parts = []
        for change_type in ChangeType:
            if counts[change_type.value] > 0:
                noun = "file" if counts[change_type.value] == 1 else "files"
                parts.append(f"{counts[change_type.value]} {noun} {change_type.value}")
        return ", ".join(parts)

    def format(self, include_content: bool = False) -> str:
        """
        Format diff for display.

        Args:
            include_content: Whether to append unified diffs of each file
        """
        lines = [f"Diff: {self.from_ref} -> {self.to_ref}", f"Summary: {self.summary()}"]
        for change in self.changes:
            lines.append(f"  {change.summary()}")
        if include_content:
            for change in self.changes:
                if change.change_type == ChangeType.RENAMED:
                    continue
                lines.append("")
                lines.append(change.unified_diff().rstrip("\n"))
        return "\n".join(lines)


def compare_snapshots(
    old_files: Iterable[FileRecord],
    new_files: Iterable[FileRecord],
    from_ref: str = "old",
    to_ref: str = "new",
) -> SnapshotDiff:
    """
    Compute diff between two snapshots.

    Changes are listed in new-snapshot order, followed by removals in
    old-snapshot order.
    """
    old_map: Dict[str, FileRecord] = {f.id: f for f in old_files}
    new_list = list(new_files)
    new_ids = {f.id for f in new_list}

    changes: List[FileChange] = []
    for record in new_list:
        previous = old_map.get(record.id)
        if previous is None:
            changes.append(FileChange(ChangeType.ADDED, None, record))
        elif previous.content != record.content:
            changes.append(FileChange(ChangeType.MODIFIED, previous, record))
        elif previous.name != record.name:
            changes.append(FileChange(ChangeType.RENAMED, previous, record))

    for file_id, previous in old_map.items():
        if file_id not in new_ids:
            changes.append(FileChange(ChangeType.REMOVED, previous, None))

    return SnapshotDiff(from_ref=from_ref, to_ref=to_ref, changes=changes)
