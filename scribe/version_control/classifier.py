"""
Change classification of the working set against HEAD.

Classification is by content only: a rename without a content change
leaves a file unchanged.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Collection, Dict, Iterable, List, Tuple

from .records import Commit, FileRecord


class FileStatus(str, Enum):
    """Status of a working-set file relative to HEAD."""

    MODIFIED = "modified"
    UNTRACKED = "untracked"
    UNCHANGED = "unchanged"

    @property
    def marker(self) -> str:
        return {"modified": "M", "untracked": "U", "unchanged": " "}[self.value]


@dataclass
class ChangeSet:
    """
    Partition of the working set into modified, untracked and unchanged files.

    Each list keeps working-set order. Every working-set file appears in
    exactly one list.
    """

    head_hash: str
    modified: List[FileRecord] = field(default_factory=list)
    untracked: List[FileRecord] = field(default_factory=list)
    unchanged: List[FileRecord] = field(default_factory=list)

    @property
    def changed(self) -> List[FileRecord]:
        """Modified files followed by untracked files."""
        return self.modified + self.untracked

    def pending(self, staged_ids: Collection[str]) -> List[FileRecord]:
        """Changed files that are not yet staged."""
        return [f for f in self.changed if f.id not in staged_ids]

    def changed_ids(self) -> List[str]:
        return [f.id for f in self.changed]

    def status_of(self, file_id: str) -> FileStatus:
        """
        Status of a file in this change set.

        Raises:
            KeyError: If the id was not part of the classified working set
        """
        for status, records in self._groups():
            if any(f.id == file_id for f in records):
                return status
        raise KeyError(file_id)

    def entries(self) -> List[Tuple[FileStatus, FileRecord]]:
        """(status, record) pairs for every changed file."""
        return [(FileStatus.MODIFIED, f) for f in self.modified] + [
            (FileStatus.UNTRACKED, f) for f in self.untracked
        ]

    def is_clean(self) -> bool:
        return not self.modified and not self.untracked

    def summary(self) -> str:
        if self.is_clean():
            return "No changes"
        parts = []
        if self.modified:
            parts.append(f"{len(self.modified)} modified")
        if self.untracked:
            parts.append(f"{len(self.untracked)} untracked")
        return ", ".join(parts)

    def format(self, staged_ids: Collection[str] = ()) -> str:
        """Format the change set for display, marking staged files."""
        lines = [f"HEAD {self.head_hash[:7]}: {self.summary()}"]
        for status, record in self.entries():
            staged = "+" if record.id in staged_ids else " "
            lines.append(f" {staged}{status.marker} {record.name}")
        return "\n".join(lines)

    def _groups(self) -> Tuple[Tuple[FileStatus, List[FileRecord]], ...]:
        return (
            (FileStatus.MODIFIED, self.modified),
            (FileStatus.UNTRACKED, self.untracked),
            (FileStatus.UNCHANGED, self.unchanged),
        )


def classify(working_set: Iterable[FileRecord], head: Commit) -> ChangeSet:
    """
    Classify working-set files against HEAD.

    Args:
        working_set: Current files, in working-set order
        head: The commit to compare against

    Returns:
        ChangeSet partitioning the working set
    """
    head_files: Dict[str, FileRecord] = head.file_map()
    result = ChangeSet(head_hash=head.hash)

    for record in working_set:
        committed = head_files.get(record.id)
        if committed is None:
            result.untracked.append(record)
        elif committed.content != record.content:
            result.modified.append(record)
        else:
            result.unchanged.append(record)

    return result
