"""
Commit construction.

Builds a new full snapshot from the staged files plus every unstaged file
carried forward from the previous HEAD.
"""

from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from ..logging import get_scribe_logger
from .errors import ValidationError
from .records import Commit, FileRecord, compute_commit_hash

log = get_scribe_logger("version_control")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CommitBuilder:
    """
    Assembles immutable commits.

    The builder has no side effects: pushing the result onto history and
    clearing the staging area are left to the caller.
    """

    def __init__(
        self,
        author: str,
        clock: Optional[Callable[[], datetime]] = None,
        hash_length: int = 40,
        short_hash_length: int = 7,
    ):
        """
        Initialize the builder.

        Args:
            author: Identity recorded on every commit
            clock: Source of commit timestamps
            hash_length: Hex length of commit hashes
            short_hash_length: Hex length of abbreviated hashes
        """
        self.author = author
        self.clock = clock or _utc_now
        self.hash_length = hash_length
        self.short_hash_length = short_hash_length

    def commit(
        self,
        message: str,
        working_set: Iterable[FileRecord],
        staged_ids: Iterable[str],
        head: Commit,
    ) -> Commit:
        """
        Build a commit from the staged files and HEAD.

        Args:
            message: Commit message; must not be blank
            working_set: Current files
            staged_ids: Staged ids in staging order; ids missing from the
                working set are ignored
            head: Current HEAD commit

        Returns:
            New commit whose files are the staged snapshots followed by the
            unstaged HEAD files in HEAD order

        Raises:
            ValidationError: If the message is blank or nothing is staged
        """
        message = message.strip()
        if not message:
            raise ValidationError("Commit message cannot be empty")

        current: Dict[str, FileRecord] = {f.id: f for f in working_set}
        staged: List[FileRecord] = [
            current[file_id] for file_id in staged_ids if file_id in current
        ]
        if not staged:
            raise ValidationError("Nothing staged to commit")

        staged_set = {f.id for f in staged}
        carried = [f for f in head.files if f.id not in staged_set]
        files = tuple(staged + carried)

        timestamp = self.clock().isoformat()
        commit_hash = compute_commit_hash(
            message=message,
            author=self.author,
            timestamp=timestamp,
            files=files,
            parent_hash=head.hash,
            length=self.hash_length,
        )

        commit = Commit(
            hash=commit_hash,
            message=message,
            timestamp=timestamp,
            author=self.author,
            files=files,
            parent_hash=head.hash,
            short_hash_length=self.short_hash_length,
        )
        log.debug(
            f"Built commit {commit.short_hash}",
            staged=len(staged),
            carried=len(carried),
        )
        return commit

    def initial(self, message: str, files: Iterable[FileRecord]) -> Commit:
        """Build a root commit holding every given file."""
        snapshot = tuple(files)
        timestamp = self.clock().isoformat()
        commit_hash = compute_commit_hash(
            message=message,
            author=self.author,
            timestamp=timestamp,
            files=snapshot,
            parent_hash=None,
            length=self.hash_length,
        )
        return Commit(
            hash=commit_hash,
            message=message,
            timestamp=timestamp,
            author=self.author,
            files=snapshot,
            parent_hash=None,
            short_hash_length=self.short_hash_length,
        )
